import logging
from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile

from .config import get_config
from .header import sanitize_header
from .loader import OutputFormat, decode_bytes, parse, shape_table
from .models import EncodingReport, HealthResponse, ParseOptions, ParseResponse, TextParseRequest
from .shapes import split_table

logger = logging.getLogger(__name__)

config = get_config()

app = FastAPI(
    title="csvshape",
    description="Quote-aware CSV parsing into records, result sets and JSON",
    version="0.1.0",
)


def _shape_response(text: str, options: ParseOptions, encoding: Optional[EncodingReport] = None) -> ParseResponse:
    delimiter = options.delimiter if options.delimiter is not None else config.delimiter
    row_limit = options.row_limit if options.row_limit is not None else config.row_limit
    cleanup = options.cleanup_columns if options.cleanup_columns is not None else config.cleanup_columns

    try:
        fmt = OutputFormat.coerce(options.output)
        table = parse(text, delimiter=delimiter, row_limit=row_limit)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if cleanup:
        sanitize_header(table)
    header, rows = split_table(table)
    shaped = shape_table(table, fmt, options.root_name)

    response = ParseResponse(
        output=fmt.value,
        columns=list(header),
        row_count=len(rows),
        encoding=encoding,
    )
    if fmt is OutputFormat.RECORDS:
        response.records = shaped
    elif fmt is OutputFormat.RESULTSET:
        response.result_set = shaped
    else:
        response.json_text = shaped
    return response


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/parse", response_model=ParseResponse)
async def parse_csv(
    file: UploadFile = File(...),
    output: str = Form("records"),
    delimiter: Optional[str] = Form(None),
    row_limit: Optional[int] = Form(None),
    cleanup_columns: Optional[bool] = Form(None),
    root_name: Optional[str] = Form(None),
):
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    if len(raw) > config.max_upload_bytes:
        raise HTTPException(
            status_code=422,
            detail=f"CSV file too large ({len(raw):,} bytes, max {config.max_upload_bytes:,})",
        )

    text, report = decode_bytes(raw)
    try:
        options = ParseOptions(
            output=output,
            delimiter=delimiter,
            row_limit=row_limit,
            cleanup_columns=cleanup_columns,
            root_name=root_name,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    logger.info("Parsing upload %s (%d bytes, %s)", file.filename, len(raw), report["decode_used"])
    return _shape_response(text, options, EncodingReport(**report))


@app.post("/parse/text", response_model=ParseResponse)
def parse_text(request: TextParseRequest):
    return _shape_response(request.text, request)
