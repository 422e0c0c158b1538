"""Receipt upload dependency — validates the multipart file before the handler runs.

The whole file is held in memory and stored as a BYTEA column, so the size
cap is enforced while reading: at most RECEIPT_MAX_BYTES + 1 bytes are
ever pulled from the upload.
"""

from typing import Annotated

from fastapi import File, UploadFile

from config.settings import settings
from src.tf_common.errors import ReceiptTooLargeError, UnsupportedReceiptTypeError
from src.tf_expense.domain.models import Receipt


async def read_receipt(
    receipt: Annotated[UploadFile | None, File()] = None,
) -> Receipt | None:
    """Return the uploaded receipt, None when no file was sent.

    Raises UnsupportedReceiptTypeError / ReceiptTooLargeError (HTTP 400).
    """
    if receipt is None or not receipt.filename:
        return None

    content_type = receipt.content_type
    if content_type not in settings.RECEIPT_ALLOWED_TYPES:
        raise UnsupportedReceiptTypeError(content_type)

    data = await receipt.read(settings.RECEIPT_MAX_BYTES + 1)
    if len(data) > settings.RECEIPT_MAX_BYTES:
        raise ReceiptTooLargeError(settings.RECEIPT_MAX_BYTES)

    return Receipt(data=data, content_type=content_type)
