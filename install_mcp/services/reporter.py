"""Installation log rendering."""

from collections.abc import Iterable

from install_mcp.models import ComposedCommand, ExecutionOutcome

REPORT_HEADER = "📦 Software Installation Log"
SUCCESS_MARKER = "✅ Installation command executed successfully"
FAILURE_MARKER = "❌ Installation failed"
REDACTED = "****"


def redact_text(text: str, secrets: Iterable[str]) -> str:
    """Mask every non-empty secret in text."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, REDACTED)
    return text


def render_report(
    command: ComposedCommand,
    outcome: ExecutionOutcome,
    redact: Iterable[str] = (),
) -> str:
    """Render an installation log.

    Only the composed command is echoed, never the raw request, so
    operator input cannot add lines above the marker. The remote output
    is appended verbatim as the last section and is never interpreted.

    Args:
        command: Command that was executed
        outcome: Execution result
        redact: Values to mask in the command line

    Returns:
        Multi-line plain-text log
    """
    lines = [
        REPORT_HEADER,
        "",
        f"Server: {command.server_address}",
        f"Command: {redact_text(command.text, redact)}",
        "",
    ]

    if outcome.success:
        lines.append(SUCCESS_MARKER)
    else:
        lines.append(f"{FAILURE_MARKER}: {outcome.failure_detail or 'unknown error'}")

    lines.append("")
    lines.append("Output:")
    return "\n".join(lines) + "\n" + outcome.remote_output
