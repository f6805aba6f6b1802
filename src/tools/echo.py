"""Echo tool, used to verify a client can reach the server."""

from src.core.errors import ToolError


async def echo_text(text: str) -> dict[str, str]:
    if not text or not text.strip():
        msg = (
            "Oops! It looks like you sent me empty text. "
            "Please provide some text to echo back."
        )
        raise ToolError(msg)
    return {"echoed": text}
