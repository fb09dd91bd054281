from fastapi import FastAPI, File, UploadFile, HTTPException
from pydantic import BaseModel, Field
from typing import List

from logtables.errors import MalformedInput, SchemaDriftError
from logtables.parser import parse_log_document
from logtables.tables import TableSet, build_tables
from logtables.utils import parse_bool

app = FastAPI(
    title="Log Tables Builder",
    version="1.0.0",
    description="Turn an uploaded JSON update log into one table per update category."
)

# ---------------- Models ----------------
class TableOut(BaseModel):
    category: str
    columns: List[str]
    rows: List[List[str]] = Field(default_factory=list, description="Rows in file-then-record order; width may drift")

class BuildResponse(BaseModel):
    tables: List[TableOut] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

def to_response(table_set: TableSet) -> BuildResponse:
    return BuildResponse(
        tables=[TableOut(category=t.category, columns=t.columns, rows=t.rows) for t in table_set],
        warnings=[n.message for n in table_set.notices],
    )

# ---------------- API ----------------
@app.get("/healthz")
async def healthz():
    return {"status": "ok"}

@app.post("/v1/tables:build", response_model=BuildResponse)
async def build(file: UploadFile = File(None), strict_drift: str = "false"):
    if not file:
        raise HTTPException(status_code=400, detail="No file provided")

    content = await file.read()
    try:
        document = parse_log_document(content)
        table_set = build_tables(document, strict=parse_bool(strict_drift))
    except (MalformedInput, SchemaDriftError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return to_response(table_set)
