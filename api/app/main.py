# api/app/main.py

import os
import time
from contextlib import asynccontextmanager
from typing import Dict
from fastapi import FastAPI, UploadFile, File, HTTPException, Form, Body
from fastapi.middleware.cors import CORSMiddleware
from paleo_doc_utils import utils, settings, schemas, transcriber, demo
from paleo_doc_utils.encoding import is_image_type
from paleo_doc_utils.errors import (
    ERROR_TYPE_HEADER,
    ConfigurationError,
    EncodingError,
    FetchError,
    InferenceError,
    UnsupportedFileError,
)

logger = utils.setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.get_api_key():
        logger.warning("MISTRAL_API_KEY is not set; every transcription will fail until it is")
    yield


app = FastAPI(title="PaleoDoc API", version="0.1.0", lifespan=lifespan)

# the Streamlit front-end is served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.post("/transcribe", response_model=schemas.TranscriptionResponse)
async def transcribe_endpoint(
    file: UploadFile = File(None),
    url: str = Form(None)
):
    """
    1) Take an uploaded image or an image URL
    2) Reject anything whose declared type is not image/*
    3) Send it to the model with the paleography prompt
    4) Return the text verbatim plus request metadata
    """
    if not file and not url:
        raise HTTPException(
            status_code=400,
            detail="Please provide an uploaded file or a URL"
        )

    if url:
        try:
            raw, content_type = demo.fetch_image(url)
        except FetchError as e:
            raise HTTPException(status_code=400, detail=e.message)
        filename = url.split("/")[-1] or "remote_image"
    else:
        filename = file.filename or "unnamed_file"
        content_type = file.content_type or "application/octet-stream"
        raw = await file.read()

    if not is_image_type(content_type):
        logger.warning(f"Rejected {filename}: content type {content_type}")
        raise HTTPException(status_code=415, detail=UnsupportedFileError.default_message)

    logger.info(
        f"Processing file: {filename}, size: {len(raw)} bytes, "
        f"hash: {utils.compute_file_hash(raw)}, type: {content_type}"
    )
    start_time = time.time()
    try:
        text = transcriber.transcribe(raw, content_type)
    except ConfigurationError as e:
        logger.error("Transcription not configured: %s", e.message)
        raise HTTPException(
            status_code=503, detail=e.message,
            headers={ERROR_TYPE_HEADER: ConfigurationError.error_type},
        )
    except EncodingError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except InferenceError as e:
        logger.error("Transcription failed for %s: %s", filename, e.message)
        raise HTTPException(status_code=502, detail=e.message)

    raw_json = {
        "filename": filename,
        "extension": os.path.splitext(filename)[1].lstrip(".").lower(),
        "content_type": content_type,
        "source_type": "url" if url else "upload",
        "file_size_bytes": len(raw),
        "file_hash": utils.compute_file_hash(raw),
        "model": settings.MISTRAL_MODEL,
        "processing_time_seconds": round(time.time() - start_time, 2),
        "timestamp": utils.get_timestamp(),
    }
    return schemas.TranscriptionResponse(text=text, raw_json=raw_json)


@app.post("/validate_api_key", response_model=schemas.ApiKeyValidation)
async def validate_api_key(data: Dict[str, str] = Body(...)):
    """
    Check a Mistral API key. 200 if valid, 401 if rejected.
    """
    api_key = data.get("api_key")
    if not api_key:
        raise HTTPException(status_code=400, detail="API key is required")

    if not transcriber.validate_api_key(api_key):
        raise HTTPException(status_code=401, detail="Invalid API key")
    return schemas.ApiKeyValidation(status="valid", message="API key is valid")


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "timestamp": utils.get_timestamp(),
        "model": settings.MISTRAL_MODEL,
        "configured": bool(settings.get_api_key()),
    }
