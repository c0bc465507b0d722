import logging
import os
import secrets
import shutil
import time
from typing import List

from fastapi import UploadFile
from werkzeug.utils import secure_filename

from config import UPLOAD_DIR, UPLOAD_URL_PREFIX

logger = logging.getLogger(__name__)


def ensure_upload_dir(path: str = UPLOAD_DIR) -> str:
    os.makedirs(path, exist_ok=True)
    return path


def unique_filename(original: str) -> str:
    """<epoch-ms>-<random>-<sanitised original name>"""
    safe_name = secure_filename(original or "") or "upload"
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}-{safe_name}"


def save_media_files(files: List[UploadFile], upload_dir: str = UPLOAD_DIR) -> List[str]:
    """
    Writes the uploaded files to disk and returns their public relative URLs.
    If any write fails, the files already written for this call are removed.
    """
    ensure_upload_dir(upload_dir)
    paths = []
    try:
        for upload in files:
            filename = unique_filename(upload.filename)
            paths.append(f"{UPLOAD_URL_PREFIX}/{filename}")
            with open(os.path.join(upload_dir, filename), "wb") as out:
                shutil.copyfileobj(upload.file, out)
            logger.debug("Stored upload %s (%s)", filename, upload.content_type)
    except Exception:
        discard_media_files(paths, upload_dir)
        raise
    return paths


def discard_media_files(paths: List[str], upload_dir: str = UPLOAD_DIR) -> None:
    """Removes stored uploads given their public URLs. Missing files are skipped."""
    for path in paths:
        filename = os.path.basename(path)
        try:
            os.remove(os.path.join(upload_dir, filename))
        except FileNotFoundError:
            continue
        logger.info("Discarded orphaned upload %s", filename)
