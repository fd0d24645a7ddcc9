"""Blob proxy surface: list, fetch, upsert, raw write and delete by key."""
from __future__ import annotations

import json

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response

from roster.storage import ObjectStore

router = APIRouter(tags=["blob"])


def _get_object_store(request: Request) -> ObjectStore:
    store = getattr(getattr(request.app, "state", None), "object_store", None)
    if not store:
        raise RuntimeError("Object store not configured")
    return store


@router.get("/list")
def list_blobs(request: Request, prefix: str = ""):
    store = _get_object_store(request)
    return {"blobs": [blob.to_dict() for blob in store.list(prefix)]}


@router.post("/blob/update")
async def update_blob(request: Request):
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(400, "Body must be JSON")
    if not isinstance(payload, dict):
        raise HTTPException(400, "Body must be an object with 'key' and 'data'")
    key = str(payload.get("key") or "").strip()
    if not key or "data" not in payload:
        raise HTTPException(400, "Both 'key' and 'data' are required")
    data = json.dumps(payload["data"], ensure_ascii=False).encode("utf-8")
    url = _get_object_store(request).put(key, data)
    return {"pathname": key, "url": url, "size": len(data)}


@router.api_route("/blob/{key:path}", methods=["GET", "POST"])
def get_blob(key: str, request: Request):
    raw = _get_object_store(request).get(key)
    if raw is None:
        raise HTTPException(404, "Blob not found")
    return Response(content=raw, media_type="application/json")


@router.put("/blob/{key:path}")
async def put_blob(key: str, request: Request):
    data = await request.body()
    url = _get_object_store(request).put(key, data)
    return {"pathname": key, "url": url, "size": len(data)}


@router.delete("/blob/{key:path}")
def delete_blob(key: str, request: Request):
    _get_object_store(request).delete(key)
    return {"success": True}
