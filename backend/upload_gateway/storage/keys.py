"""
Object key construction.

Pattern: {directory}/{timestamp_}{base_name}{.ext}

- The timestamp (ms since epoch) is only present for single-file uploads,
  so repeated uploads of the same name land on distinct keys.
- Batch uploads reuse the original base name, so a repeated upload
  overwrites the previous object.
- The extension comes from the declared content type; unknown types get
  no extension and no dot.
"""
import mimetypes
import time
from typing import Optional

# Canonical extensions for common content types. Anything else falls back
# to the mimetypes registry.
CONTENT_TYPE_EXTENSIONS = {
    # Images
    'image/jpeg': 'jpeg',
    'image/jpg': 'jpg',
    'image/png': 'png',
    'image/gif': 'gif',
    'image/webp': 'webp',
    'image/svg+xml': 'svg',
    'image/heic': 'heic',
    'image/heif': 'heif',
    # Audio
    'audio/mpeg': 'mp3',
    'audio/mp3': 'mp3',
    'audio/mp4': 'm4a',
    'audio/m4a': 'm4a',
    'audio/wav': 'wav',
    'audio/webm': 'weba',
    'audio/ogg': 'oga',
    'audio/aac': 'aac',
    # Video
    'video/mp4': 'mp4',
    'video/webm': 'webm',
    'video/quicktime': 'mov',
    # Documents
    'application/pdf': 'pdf',
    'application/json': 'json',
    'application/zip': 'zip',
    'application/octet-stream': 'bin',
    'text/plain': 'txt',
    'text/csv': 'csv',
    'text/html': 'html',
}


def normalize_content_type(content_type: Optional[str]) -> str:
    """Strip parameters (e.g. charset) and lower-case a content type."""
    if not content_type:
        return ''
    return content_type.split(';', 1)[0].strip().lower()


def get_extension(content_type: Optional[str]) -> str:
    """
    Get file extension for a content type.
    
    Args:
        content_type: MIME type as declared by the client
        
    Returns:
        File extension (without dot), or '' if the type is unknown
    """
    normalized = normalize_content_type(content_type)
    if not normalized:
        return ''
    
    extension = CONTENT_TYPE_EXTENSIONS.get(normalized)
    if extension:
        return extension
    
    guessed = mimetypes.guess_extension(normalized, strict=False)
    return guessed.lstrip('.') if guessed else ''


def base_name_from_filename(filename: Optional[str]) -> str:
    """
    Base name of an uploaded file: everything before the first '.'.
    
    'my.report.png' gives 'my'; names with no dot are returned as-is.
    """
    return (filename or '').split('.', 1)[0]


def current_timestamp_ms() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)


def build_object_key(
    directory_name: str,
    base_name: str,
    content_type: Optional[str],
    timestamp: Optional[int] = None
) -> str:
    """
    Build the object key for an upload.
    
    Args:
        directory_name: Prefix, used verbatim
        base_name: Name of the object without extension
        content_type: Declared MIME type, used for the extension
        timestamp: Optional collision-avoiding prefix for the name
        
    Returns:
        Object key string
    """
    extension = get_extension(content_type)
    stamp = f"{timestamp}_" if timestamp is not None else ''
    suffix = f".{extension}" if extension else ''
    
    return f"{directory_name}/{stamp}{base_name}{suffix}"
