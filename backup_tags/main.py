"""
Backup Tags API: tags and their associations with backups and saves.
"""
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backup_tags.colors import DEFAULT_TAG_COLORS
from backup_tags.errors import (
    DuplicateTagError,
    InvalidColorError,
    TagNotFoundError,
    TagsError,
)
from backup_tags.tags_store import TagStore, get_tags_db_path

# Load .env from project root (parent of backup_tags/)
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    TagNotFoundError: 404,
    DuplicateTagError: 409,
    InvalidColorError: 400,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.store = TagStore(get_tags_db_path())
    logger.info("Tags database: %s", app.state.store.path)
    yield
    app.state.store = None


app = FastAPI(title="Backup Tags API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TagsError)
async def tags_error_handler(request: Request, exc: TagsError):
    status = ERROR_STATUS.get(type(exc), 500)
    if status == 500:
        logger.error("Tag store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"detail": str(exc)})


# --- Request models ---

class CreateTagRequest(BaseModel):
    name: str
    color: str


class BackupTagsRequest(BaseModel):
    save_name: str
    backup_name: str
    tag_names: list[str] = Field(default_factory=list)


class SaveTagsRequest(BaseModel):
    relative_path: str
    tag_names: list[str] = Field(default_factory=list)


def _store(request: Request) -> TagStore:
    return request.app.state.store


# --- Endpoints ---

@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/colors")
def get_colors():
    """Return the default tag palette (id, label, value)."""
    return {"colors": DEFAULT_TAG_COLORS}


@app.get("/tags")
def list_tags(request: Request):
    return {"tags": _store(request).get_all_tags()}


@app.post("/tags", status_code=201)
def add_tag(request: Request, body: CreateTagRequest):
    return _store(request).create_tag(body.name, body.color)


@app.delete("/tags/{name:path}")
def remove_tag(request: Request, name: str):
    _store(request).delete_tag(name)
    return {"ok": True}


@app.get("/backups/tags")
def list_backup_tags(request: Request, save_name: str, backup_name: str):
    return {"tags": _store(request).get_backup_tags(save_name, backup_name)}


@app.post("/backups/tags")
def add_backup_tags(request: Request, body: BackupTagsRequest):
    _store(request).add_tags_to_backup(body.save_name, body.backup_name, body.tag_names)
    return {"ok": True}


@app.post("/backups/tags/remove")
def remove_backup_tags(request: Request, body: BackupTagsRequest):
    _store(request).remove_tags_from_backup(body.save_name, body.backup_name, body.tag_names)
    return {"ok": True}


@app.get("/saves/tags")
def list_save_tags(request: Request, relative_path: str):
    return {"tags": _store(request).get_save_tags(relative_path)}


@app.post("/saves/tags")
def add_save_tags(request: Request, body: SaveTagsRequest):
    _store(request).add_tags_to_save(body.relative_path, body.tag_names)
    return {"ok": True}


@app.post("/saves/tags/remove")
def remove_save_tags(request: Request, body: SaveTagsRequest):
    _store(request).remove_tags_from_save(body.relative_path, body.tag_names)
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=os.getenv("BACKUP_TAGS_LOG_LEVEL", "INFO").upper())
    uvicorn.run(
        app,
        host=os.getenv("BACKUP_TAGS_HOST", "127.0.0.1"),
        port=int(os.getenv("BACKUP_TAGS_PORT", "8000")),
    )
