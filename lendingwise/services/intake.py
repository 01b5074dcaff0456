import asyncio
import logging
from typing import Callable, List, Optional, Sequence, Tuple

from fastapi import UploadFile

from lendingwise.errors import UnsupportedFileError
from lendingwise.models import FileAttachment
from lendingwise.utils.encoding import encode_bytes, guess_mime_type

logger = logging.getLogger("lendingwise.intake")


def is_supported(mime_type: str) -> bool:
    return mime_type == "application/pdf" or mime_type.startswith("image/")


def partition_uploads(uploads: Sequence[UploadFile]) -> Tuple[List[UploadFile], List[str]]:
    """Split uploads into the ones we can send and the names of the ones we can't."""
    supported, rejected = [], []
    for upload in uploads:
        if is_supported(guess_mime_type(upload.filename, upload.content_type)):
            supported.append(upload)
        else:
            rejected.append(upload.filename or "document")
    return supported, rejected


async def encode_upload(upload: UploadFile) -> FileAttachment:
    content = await upload.read()
    encoded = await asyncio.to_thread(encode_bytes, content)
    return FileAttachment(
        name=upload.filename or "document",
        mime_type=guess_mime_type(upload.filename, upload.content_type),
        encoded_content=encoded,
    )


async def encode_uploads(
    uploads: Sequence[UploadFile],
    on_encoded: Optional[Callable[[FileAttachment], None]] = None,
) -> List[FileAttachment]:
    """
    Encode every upload concurrently.

    Attachments are handed to ``on_encoded`` and returned in the order the
    encodes finish, not the order the files were given. Files that are not
    PDFs or images are skipped; if nothing is left, UnsupportedFileError.
    """
    supported, rejected = partition_uploads(uploads)
    for name in rejected:
        logger.warning(f"Skipping {name}: only PDF or image files are supported")
    if not supported:
        raise UnsupportedFileError(f"Only PDF or image files are supported: {', '.join(rejected)}")

    encoded = []
    for next_done in asyncio.as_completed([encode_upload(u) for u in supported]):
        attachment = await next_done
        encoded.append(attachment)
        if on_encoded is not None:
            on_encoded(attachment)
        logger.info(f"Encoded {attachment.name} ({attachment.mime_type})")
    return encoded
