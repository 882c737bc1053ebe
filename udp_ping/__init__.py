"""udp-ping - UDP broadcast discovery utility.

A Responder answers ``PING`` probes with its host name; a Prober broadcasts
one probe and collects replies for a fixed window.
"""

__version__ = "0.1.0"
