"""
Multipart body for the QuickBooks ``/upload`` (Attachable) endpoint.
"""

from __future__ import annotations

import base64
import json
from typing import Any, Dict, List, Optional, Tuple

from urllib3.fields import RequestField
from urllib3.filepost import encode_multipart_formdata

METADATA_PART = "file_metadata_01"
CONTENT_PART = "file_content_01"


def build_upload_body(
    file_name: str,
    content_type: str,
    content: bytes,
    metadata: Optional[Dict[str, Any]] = None,
    *,
    boundary: Optional[str] = None,
) -> Tuple[bytes, str]:
    """Return ``(body, content_type_header)`` for an attachment upload.

    ``metadata`` is the Attachable JSON (e.g. ``AttachableRef`` links to an
    Invoice); when omitted only the file part is sent.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    fields: List[RequestField] = []

    if metadata is not None:
        meta = RequestField(METADATA_PART, json.dumps(metadata))
        meta.make_multipart(content_type="application/json; charset=UTF-8")
        fields.append(meta)

    part = RequestField(CONTENT_PART, base64.encodebytes(content), filename=file_name)
    part.make_multipart(content_type=content_type)
    part.headers["Content-Transfer-Encoding"] = "base64"
    fields.append(part)

    return encode_multipart_formdata(fields, boundary=boundary)
