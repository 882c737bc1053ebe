"""JSON report generator for Prober runs.

Turns the replies collected in one window into a structured report.
"""

import json
from datetime import datetime, timezone
from typing import Any, Optional

from ..discovery.prober import Reply


class JsonReporter:
    """Generates JSON reports from collected replies."""

    def generate(
        self,
        replies: list[Reply],
        target: tuple,
        window: float,
        duration_ms: int = 0,
        error: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate a report from one collection run.

        Args:
            replies: Replies in arrival order.
            target: (host, port) the probe was sent to.
            window: Collection window in seconds.
            duration_ms: Run duration in milliseconds.
            error: Fatal error message if the run aborted.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "target": f"{target[0]}:{target[1]}",
            "window": window,
            "status": "completed" if error is None else "failed",
            "summary": {
                "replies": len(replies),
                "responders": len({r.endpoint for r in replies}),
                "duration_ms": duration_ms,
            },
            "replies": [
                {
                    "host": r.host,
                    "port": r.port,
                    "text": r.text,
                    "received_at": datetime.fromtimestamp(
                        r.received_at, timezone.utc
                    ).isoformat(),
                }
                for r in replies
            ],
            "error": error,
        }

    def to_json_string(self, report: dict[str, Any], pretty: bool = True) -> str:
        """Convert report to JSON string."""
        if pretty:
            return json.dumps(report, indent=2, ensure_ascii=False)
        return json.dumps(report, ensure_ascii=False)

    def generate_output(self, report: dict[str, Any]) -> dict[str, Any]:
        """Wrap a report in the command output envelope.

        {
            "success": bool,
            "command": "client",
            "data": { ... },
            "message": str
        }
        """
        success = report["status"] == "completed"
        count = report["summary"]["replies"]

        if not success:
            message = f"Probe failed: {report['error']}"
        elif count == 0:
            message = "No replies received"
        else:
            message = f"{count} repl{'y' if count == 1 else 'ies'} received"

        return {
            "success": success,
            "command": "client",
            "data": report,
            "message": message,
        }
