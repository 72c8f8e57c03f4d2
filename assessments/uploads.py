# assessments/uploads.py
import posixpath
import re

from PIL import Image, UnidentifiedImageError

from .errors import Rejection
from .phases import XLSX_TYPE, XLS_TYPE


MAX_UPLOAD_BYTES = 10 * 1024 * 1024

# Declared image type -> format name Pillow reports for the actual bytes
IMAGE_FORMATS = {
    'image/png': 'PNG',
    'image/jpeg': 'JPEG',
    'image/jpg': 'JPEG',
}

SIGNATURES = {
    XLSX_TYPE: b'PK\x03\x04',
    XLS_TYPE: b'\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1',
}

UNSAFE_FILENAME_CHARS = re.compile(r'[^a-zA-Z0-9._-]')

# Below the usual 255-byte filename limit, leaving room for the suffix a
# storage backend appends when a name is already taken
MAX_ARTIFACT_NAME_LENGTH = 200
MAX_EXTENSION_LENGTH = 16


def validate_upload(file, allowed_types, max_size=MAX_UPLOAD_BYTES):
    """
    Checks a file's declared metadata before any I/O happens.
    Returns None when acceptable, otherwise the first failing Rejection
    (presence, then size, then type).
    """
    if file is None:
        return Rejection.MISSING_FILE
    if file.size > max_size:
        return Rejection.TOO_LARGE
    if getattr(file, 'content_type', None) not in allowed_types:
        return Rejection.INVALID_TYPE
    return None


def sniff_content(file):
    """
    Confirms the payload's leading bytes match its declared content type.
    The stream is rewound afterwards so it can still be stored.
    """
    content_type = getattr(file, 'content_type', None)
    try:
        if content_type in IMAGE_FORMATS:
            file.seek(0)
            try:
                with Image.open(file) as image:
                    detected = image.format
            except (UnidentifiedImageError, Image.DecompressionBombError, OSError):
                return Rejection.INVALID_TYPE
            if detected != IMAGE_FORMATS[content_type]:
                return Rejection.INVALID_TYPE
            return None

        signature = SIGNATURES.get(content_type)
        if signature is None:
            return Rejection.INVALID_TYPE
        file.seek(0)
        if file.read(len(signature)) != signature:
            return Rejection.INVALID_TYPE
        return None
    finally:
        file.seek(0)


def artifact_name(examination_id, filename):
    # e.g. ("EX-100", "my shot.png") -> "EX-100_my_shot.png"
    name = f"{examination_id}_{UNSAFE_FILENAME_CHARS.sub('_', filename or '')}"
    if len(name) <= MAX_ARTIFACT_NAME_LENGTH:
        return name

    # Over-long names keep the prefix and extension; the stem is cut
    stem, ext = posixpath.splitext(name)
    if len(ext) > MAX_EXTENSION_LENGTH:
        stem, ext = name, ''
    return stem[:MAX_ARTIFACT_NAME_LENGTH - len(ext)] + ext
