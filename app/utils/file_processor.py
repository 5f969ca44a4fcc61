import asyncio
import logging
import uuid
from pathlib import Path

import aiofiles
import pdfplumber
import PyPDF2
from fastapi import HTTPException, UploadFile

from ..config import settings

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".pdf", ".txt"}
TEXT_ENCODINGS = ("utf-8", "latin-1", "cp1252")


def validate_file(file: UploadFile, size_bytes: int) -> None:
    """
    Validate uploaded file type and size.
    Raises HTTPException for invalid files.
    """
    file_ext = Path(file.filename or "").suffix.lower()
    if file_ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Only PDF and TXT files are allowed."
        )

    if size_bytes == 0:
        raise HTTPException(status_code=400, detail="Uploaded file is empty.")

    if size_bytes > settings.max_file_size_mb * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size is {settings.max_file_size_mb}MB."
        )


def extract_text_from_pdf(file_path: str) -> str:
    """
    Extract text from a PDF with pdfplumber, falling back to PyPDF2.
    """
    try:
        with pdfplumber.open(file_path) as pdf:
            pages = [page.extract_text() for page in pdf.pages]
        logger.info("Extracted text from PDF %s", file_path)
        return "\n".join(text for text in pages if text).strip()
    except Exception as e:
        logger.warning("pdfplumber failed for %s: %s, trying PyPDF2", file_path, e)

    try:
        with open(file_path, "rb") as f:
            reader = PyPDF2.PdfReader(f)
            pages = [page.extract_text() for page in reader.pages]
        logger.info("Extracted text from PDF %s using PyPDF2", file_path)
        return "\n".join(text for text in pages if text).strip()
    except Exception as e:
        logger.error("Both pdfplumber and PyPDF2 failed for %s: %s", file_path, e)
        raise HTTPException(
            status_code=400,
            detail="Failed to extract text from PDF file. The file may be corrupted or password-protected."
        ) from e


def extract_text_from_txt(file_path: str) -> str:
    """
    Read a TXT file, trying UTF-8, Latin-1 and CP1252 in turn.
    """
    for encoding in TEXT_ENCODINGS:
        try:
            with open(file_path, "r", encoding=encoding) as f:
                content = f.read()
            logger.info("Read TXT file %s with encoding %s", file_path, encoding)
            return content
        except UnicodeDecodeError:
            logger.debug("Failed to read %s with encoding %s, trying next", file_path, encoding)
        except OSError as e:
            logger.error("Error reading TXT file %s: %s", file_path, e)
            raise HTTPException(status_code=400, detail="Failed to read text file.") from e

    raise HTTPException(
        status_code=400,
        detail="Failed to read text file with supported encodings (UTF-8, Latin-1, CP1252)."
    )


async def extract_text(file_path: str) -> str:
    if Path(file_path).suffix.lower() == ".pdf":
        return await asyncio.to_thread(extract_text_from_pdf, file_path)
    return await asyncio.to_thread(extract_text_from_txt, file_path)


async def save_uploaded_file(file: UploadFile, contents: bytes) -> str:
    """
    Write the uploaded bytes under the uploads directory using aiofiles.
    Returns the file path.
    """
    upload_dir = Path(settings.storage_path) / "uploads"
    upload_dir.mkdir(parents=True, exist_ok=True)

    suffix = Path(file.filename or "").suffix.lower()
    file_path = upload_dir / f"upload_{uuid.uuid4().hex}{suffix}"

    try:
        async with aiofiles.open(file_path, "wb") as f:
            await f.write(contents)
    except OSError as e:
        logger.error("Failed to save file %s: %s", file_path, e)
        raise HTTPException(status_code=500, detail="Failed to save uploaded file.") from e

    logger.debug("Saved upload to %s", file_path)
    return str(file_path)


def cleanup_file(file_path: str) -> None:
    path = Path(file_path)
    try:
        if path.exists():
            path.unlink()
            logger.debug("Removed temporary file %s", path)
    except OSError as exc:
        logger.warning("Failed to remove temporary file %s: %s", path, exc)
