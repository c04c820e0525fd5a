# FILE: ./vpnportal/core/uploads.py

import logging
import os
import re
import secrets
import time
from typing import BinaryIO, Optional

from vpnportal.core.errors import UploadRejected

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif"})
UPLOAD_URL_PREFIX = "/uploads"
CHUNK_SIZE = 64 * 1024

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9]")


def sanitize_component(value: str) -> str:
    return _UNSAFE_CHARS.sub("_", value)


def build_filename(original_name: Optional[str]) -> str:
    """
    نام یکتا به شکل <timestamp-ms>-<12 hex>-<basename>.<ext> می‌سازد.
    همه‌ی نویسه‌های غیر الفبایی-عددی با _ جایگزین می‌شوند تا پیمایش مسیر ممکن نباشد.
    """
    name = os.path.basename((original_name or "").replace("\\", "/"))
    base, ext = os.path.splitext(name)
    safe_base = sanitize_component(base) or "image"
    safe_ext = f".{sanitize_component(ext[1:]).lower()}" if ext else ""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}-{safe_base}{safe_ext}"


def file_url(filename: str) -> str:
    return f"{UPLOAD_URL_PREFIX}/{filename}"


class ImageStorage:
    """ذخیره و حذف تصاویر آپلود شده در یک پوشه‌ی تخت."""

    def __init__(self, upload_dir: str, max_file_size: int):
        self.upload_dir = upload_dir
        self.max_file_size = max_file_size

    def ensure_directory(self):
        os.makedirs(self.upload_dir, exist_ok=True)

    def save(self, stream: BinaryIO, original_name: Optional[str], content_type: Optional[str]) -> str:
        """
        فایل را اعتبارسنجی و ذخیره می‌کند و نام فایل تولید شده را برمی‌گرداند.
        در صورت رد شدن، هیچ فایل ناقصی روی دیسک باقی نمی‌ماند.
        """
        if content_type not in ALLOWED_IMAGE_TYPES:
            logger.warning(f"Rejected upload '{original_name}' with content type '{content_type}'.")
            raise UploadRejected("Invalid file type. Only JPEG, PNG, WebP, and GIF are allowed.")

        self.ensure_directory()
        filename = build_filename(original_name)
        final_path = os.path.join(self.upload_dir, filename)
        partial_path = f"{final_path}.part"

        written = 0
        try:
            with open(partial_path, "wb") as out:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_file_size:
                        raise UploadRejected(
                            f"File too large. Maximum size is {self.max_file_size} bytes."
                        )
                    out.write(chunk)
            os.replace(partial_path, final_path)
        except BaseException:
            if os.path.exists(partial_path):
                os.remove(partial_path)
            raise

        logger.info(f"Stored upload '{filename}' ({written} bytes).")
        return filename

    def _resolve(self, filename: str) -> str:
        if (
            not filename
            or filename != os.path.basename(filename)
            or "/" in filename
            or "\\" in filename
            or filename.startswith(".")
        ):
            raise UploadRejected("Invalid filename.")
        return os.path.join(self.upload_dir, filename)

    def delete(self, filename: str) -> bool:
        """فایل را در صورت وجود حذف می‌کند؛ نبودن فایل خطا نیست."""
        path = self._resolve(filename)
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.info(f"Upload '{filename}' was already absent.")
            return False
        logger.info(f"Deleted upload '{filename}'.")
        return True
