"""PlantUML text -> SVG rendering through a PlantUML server.

The diagram text is deflated and encoded with PlantUML's URL-safe base64
alphabet, then fetched as ``<server>/svg/<encoded>``.

Server resolution order:
  1. explicit ``server_url`` argument
  2. PLANTUML_SERVER_URL env var
  3. the public PlantUML server
"""

import logging
import os
import zlib
from typing import Optional

import httpx

from ..errors import DiagramRenderError

logger = logging.getLogger(__name__)

DEFAULT_SERVER = "https://www.plantuml.com/plantuml"

_PLANTUML_ALPHABET = (
    "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_"
)


def _encode3bytes(b1: int, b2: int, b3: int) -> str:
    """Encode 3 bytes into 4 characters of the PlantUML alphabet."""
    chunks = (
        b1 >> 2,
        ((b1 & 0x3) << 4) | (b2 >> 4),
        ((b2 & 0xF) << 2) | (b3 >> 6),
        b3 & 0x3F,
    )
    return "".join(_PLANTUML_ALPHABET[c & 0x3F] for c in chunks)


def encode_diagram(text: str) -> str:
    """Raw-deflate the diagram text and encode it for a server URL."""
    data = zlib.compress(text.encode("utf-8"))[2:-4]
    encoded = []
    for i in range(0, len(data), 3):
        chunk = data[i:i + 3].ljust(3, b"\0")
        encoded.append(_encode3bytes(chunk[0], chunk[1], chunk[2]))
    return "".join(encoded)


def render_puml_to_svg(text: str, server_url: Optional[str] = None, timeout: float = 30.0) -> str:
    """Render PlantUML text to SVG.

    Args:
        text: PlantUML source text (including @startuml/@enduml)
        server_url: PlantUML server base URL
        timeout: Request timeout in seconds

    Returns:
        SVG document text

    Raises:
        DiagramRenderError: If the server is unreachable or returns no SVG
    """
    server = (server_url or os.environ.get("PLANTUML_SERVER_URL", DEFAULT_SERVER)).rstrip("/")
    encoded = encode_diagram(text)
    url = f"{server}/svg/{encoded}"

    logger.debug("Rendering diagram via %s (encoded len=%d)", server, len(encoded))

    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
    except httpx.RequestError as e:
        raise DiagramRenderError(f"PlantUML server request failed: {e}") from e

    body = response.text
    # The server answers syntax errors with an SVG that shows the error
    if body.lstrip().startswith("<") and "<svg" in body[:500]:
        if response.status_code != 200:
            logger.warning(
                "PlantUML server returned %d with SVG content, using it",
                response.status_code,
            )
        return body

    raise DiagramRenderError(
        f"PlantUML server returned {response.status_code} without SVG content: {body[:200]}"
    )
