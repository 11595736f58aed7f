"""JSON-lines request/response channel.

Each input line is one request::

    {"id": 1, "channel": "generate-pdf", "data": {...invoice...}, "filePath": "out.pdf"}

and produces one output line with the same ``id`` plus the response mapping
(``success`` and ``filePath`` or ``error``). Requests run concurrently, so
responses are written in completion order, not input order. Without
``filePath`` the PDF goes to the suggested default path.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TextIO

from invoicer.models.brand import DEFAULT_BRAND, Brand
from invoicer.services.destination import FixedDestination
from invoicer.services.export import EngineFactory, generate_invoice_pdf
from invoicer.services.pdf_engine import launch_engine

logger = logging.getLogger(__name__)

GENERATE_PDF = "generate-pdf"


async def handle_request(
    request: dict,
    *,
    brand: Brand = DEFAULT_BRAND,
    engine_factory: EngineFactory = launch_engine,
) -> dict:
    channel = request.get("channel", GENERATE_PDF)
    if channel != GENERATE_PDF:
        return {"success": False, "error": f"Unknown channel: {channel}"}

    data = request.get("data")
    if not isinstance(data, dict):
        return {"success": False, "error": "Request has no invoice data"}

    file_path = request.get("filePath")
    if file_path is not None and not isinstance(file_path, str):
        return {"success": False, "error": "filePath must be a string"}

    return await generate_invoice_pdf(
        data,
        FixedDestination(file_path),
        brand=brand,
        engine_factory=engine_factory,
    )


async def serve(
    reader: TextIO,
    writer: TextIO,
    *,
    brand: Brand = DEFAULT_BRAND,
    engine_factory: EngineFactory = launch_engine,
) -> int:
    """Answer requests from *reader* until EOF. Returns the number of requests seen."""
    pending: set[asyncio.Task] = set()
    count = 0

    def respond(message: dict) -> None:
        writer.write(json.dumps(message, ensure_ascii=False) + "\n")
        writer.flush()

    async def process(line: str) -> None:
        try:
            request = json.loads(line)
        except json.JSONDecodeError as e:
            respond({"id": None, "success": False, "error": f"Malformed request: {e.msg}"})
            return
        if not isinstance(request, dict):
            respond({"id": None, "success": False, "error": "Request must be a JSON object"})
            return
        response = await handle_request(request, brand=brand, engine_factory=engine_factory)
        respond({"id": request.get("id"), **response})

    while True:
        line = await asyncio.to_thread(reader.readline)
        if not line:
            break
        if not line.strip():
            continue
        count += 1
        task = asyncio.create_task(process(line))
        pending.add(task)
        task.add_done_callback(pending.discard)

    if pending:
        await asyncio.gather(*pending)
    logger.info("Channel closed after %d request(s)", count)
    return count
