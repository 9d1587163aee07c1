"""Built-in detection catalog for mimesniff.

Three data sets live here so the rest of the package can import structured
metadata without any file I/O:

* ``MIME_DEFINITIONS``: the ordered signature definitions the detector
  registers by default. Order matters: tied matches are reported in this
  order.
* ``KNOWN_SUBTYPES``: well-known subtypes per top-level type.
* ``FILE_EXTENSIONS``: common file extensions grouped by category.

Signatures anchored at a non-zero offset (tar's ``ustar`` marker at byte
257, for instance) cannot be expressed; such formats are listed without
facets so they still show up in the known-type catalogue.
"""

from __future__ import annotations

import re
from typing import Dict, Mapping, Tuple

from .core.types import SignatureDefinition
from .formats.text import CategoryPattern

_I = re.IGNORECASE

_ZIP_MAGIC = (
    (0x50, 0x4B, 0x03, 0x04),
    (0x50, 0x4B, 0x05, 0x06),
    (0x50, 0x4B, 0x07, 0x08),
)
# Compound File Binary header shared by the legacy Office formats.
_OFFICE_MAGIC = (0xD0, 0xCF, 0x11, 0xE0)
_OPENXML_CONTENT_TYPES = "[Content_Types].xml"


def _sig(
    id: str,
    type: str,
    subtype: str,
    *,
    magic=None,
    members=None,
    pattern=None,
    flags: int = 0,
) -> SignatureDefinition:
    return SignatureDefinition(
        id=id,
        type=type,
        subtype=subtype,
        byte_signature=magic,
        required_members=members,
        text_pattern=re.compile(pattern, flags) if pattern is not None else None,
    )


MIME_DEFINITIONS: Tuple[SignatureDefinition, ...] = (
    # Images
    _sig("jpeg", "image", "jpeg", magic=(0xFF, 0xD8, 0xFF)),
    _sig("png", "image", "png", magic=(0x89, 0x50, 0x4E, 0x47)),
    _sig("gif87a", "image", "gif", magic=b"GIF87a"),
    _sig("gif89a", "image", "gif", magic=b"GIF89a"),
    _sig("tif", "image", "tiff", magic=(0x49, 0x49, 0x2A, 0x00)),  # little endian
    _sig("tif", "image", "tiff", magic=(0x4D, 0x4D, 0x00, 0x2A)),  # big endian
    _sig("bitmap", "image", "bmp", magic=(0x42, 0x4D)),
    _sig("icon", "image", "x-icon", magic=(0x00, 0x00, 0x01, 0x00)),
    _sig(
        "webp",
        "image",
        "webp",
        magic=(
            tuple(b"RIFFWEBP"),
            (0x52, 0x49, 0x46, 0x46, "*", "*", "*", "*", 0x57, 0x45, 0x42, 0x50),
        ),
    ),
    _sig("svg", "image", "svg+xml", pattern=r"^\s*<\s*svg[^>]*>", flags=_I),
    # Video
    _sig("mp4", "video", "mp4", magic=(0x00, 0x00, 0x00, 0x1C, 0x66, 0x74, 0x79, 0x70)),
    _sig("quicktime", "video", "quicktime", magic=(0x00, 0x00, 0x00, 0x14, 0x66, 0x74, 0x79, 0x70)),
    _sig("avi", "video", "x-msvideo", magic=b"RIFFAVI "),
    _sig("mkv", "video", "x-matroska", magic=(0x1A, 0x45, 0xDF, 0xA3)),
    _sig("webm", "video", "webm", magic=(0x1A, 0x45, 0xDF, 0xA3)),  # same EBML header as mkv
    _sig("flv", "video", "x-flv", magic=(0x46, 0x4C, 0x56, 0x01)),
    # Audio
    _sig(
        "mp3",
        "audio",
        "mpeg",
        magic=((0x49, 0x44, 0x33), (0xFF, 0xFB), (0xFF, 0xF3), (0xFF, 0xF2)),
    ),
    _sig("ogg", "audio", "ogg", magic=b"OggS"),
    _sig("wav", "audio", "wav", magic=(0x52, 0x49, 0x46, 0x46, "*", "*", "*", "*", 0x57, 0x41, 0x56, 0x45)),
    # Documents and archives
    _sig("pdf", "application", "pdf", magic=b"%PDF"),
    _sig("zip", "application", "zip", magic=_ZIP_MAGIC),
    _sig("rar", "application", "x-rar-compressed", magic=b"Rar!"),
    _sig("gzip", "application", "gzip", magic=(0x1F, 0x8B)),
    _sig("7z", "application", "x-7z-compressed", magic=(0x37, 0x7A, 0xBC, 0xAF)),
    _sig("tar", "application", "x-tar"),
    # Microsoft Office
    _sig("word", "application", "vnd.msword", magic=_OFFICE_MAGIC),
    _sig("excel", "application", "vnd.ms-excel", magic=_OFFICE_MAGIC),
    _sig("powerpoint", "application", "vnd.ms-powerpoint", magic=_OFFICE_MAGIC),
    _sig(
        "word_openxml",
        "application",
        "vnd.openxmlformats-officedocument.wordprocessingml.document",
        magic=_ZIP_MAGIC,
        members=(_OPENXML_CONTENT_TYPES, "word/document.xml"),
    ),
    _sig(
        "excel_openxml",
        "application",
        "vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        magic=_ZIP_MAGIC,
        members=(_OPENXML_CONTENT_TYPES, "xl/workbook.xml"),
    ),
    _sig(
        "powerpoint_openxml",
        "application",
        "vnd.openxmlformats-officedocument.presentationml.presentation",
        magic=_ZIP_MAGIC,
        members=(_OPENXML_CONTENT_TYPES, "ppt/presentation.xml"),
    ),
    # Fonts
    _sig("woff", "font", "woff", magic=b"wOFF"),
    _sig("woff2", "font", "woff2", magic=b"wOF2"),
    _sig("ttf", "font", "ttf", magic=(0x00, 0x01, 0x00, 0x00, 0x00)),
    _sig("otf", "font", "otf", magic=b"OTTO"),
    # Code
    _sig("shell", "application", "x-sh", pattern=r"^\s*#!"),
    _sig("json", "application", "json", pattern=r'^\s*\{\s*"name"'),
    _sig("xml", "application", "xml", pattern=r"^\s*<\?xml", flags=_I),
    _sig("javascript", "application", "javascript", pattern=r"^\s*(import|const|let|var|function)", flags=_I),
    _sig("php", "application", "x-httpd-php", pattern=r"^\s*<\?php", flags=_I),
    _sig("yaml", "application", "x-yaml", pattern=r"^\s*---\s*$", flags=_I),
    _sig(
        "sql",
        "application",
        "sql",
        pattern=r"^\s*(SELECT|FROM|INSERT\s+INTO|UPDATE|DELETE|CREATE\s+TABLE)",
        flags=_I,
    ),
    _sig("powershell", "application", "x-powershell", pattern=r"^\s*%!"),
    _sig("batch", "application", "x-bat", pattern=r"^\s*#!"),
    _sig("pem", "application", "x-pem-file", pattern=r"^\s*-----(BEGIN|END)"),
    _sig("latex", "application", "x-latex", pattern=r"^\s*(\\documentclass|\\begin|\\end)", flags=_I),
    _sig("rtf", "application", "rtf", magic=b"{\\rtf", pattern=r"^\{\\rtf", flags=_I),
    _sig("html", "text", "html", pattern=r"^\s*(<!DOCTYPE\s+html|<html)", flags=_I),
    _sig("ruby", "text", "x-ruby", pattern=r"^\s*(class|module|require)", flags=_I),
    _sig("python", "text", "x-python", pattern=r"^\s*(def|class|import)", flags=_I),
    _sig("java", "text", "x-java-source", pattern=r"^\s*(package|import)", flags=_I),
    _sig("css", "text", "css"),
    _sig("csv", "text", "csv", pattern=r"^\s*[\w\s]+,[\w\s]+", flags=_I),
    _sig("go", "text", "x-go", pattern=r"^\s*(package|import|func|var|const)", flags=_I),
    _sig("groovy", "text", "x-groovy", pattern=r"^\s*(class|def|if|else|for|while)", flags=_I),
    _sig("kotlin", "text", "x-kotlin", pattern=r"^\s*(fun|val|var|class|import)", flags=_I),
    _sig("rust", "text", "x-rust", pattern=r"^\s*(fn|struct|enum|impl|use)", flags=_I),
    _sig(
        "typescript",
        "text",
        "x-typescript",
        pattern=r"^\s*(interface|type|function|const|let|var|import|export)",
        flags=_I,
    ),
    _sig("swift", "text", "x-swift", pattern=r"^\s*(@|//)"),
    _sig("perl", "text", "x-perl", pattern=r"^\s*(use|package|my)", flags=_I),
    _sig("c", "text", "x-csrc", pattern=r"^\s*(/\*|\*/|\*|#)"),
    _sig("cpp", "text", "x-c++src", pattern=r"^\s*(//|#)"),
    _sig("csharp", "text", "x-csharp", pattern=r"^\s*(public|private|class|import)", flags=_I),
    _sig("visualbasic", "text", "x-vb", pattern=r"^\s*(using|namespace|public)", flags=_I),
    _sig("configuration", "text", "plain", pattern=r"^\s*%\w+\s*="),
    _sig("ini", "text", "plain", pattern=r"^\s*;\s*module\s*="),
    _sig("c-header", "text", "x-chdr", pattern=r"^\s*#\s*(include|define)", flags=_I),
    _sig("r", "text", "x-r-source", pattern=r"^\s*(library|function|if|else|for|while)", flags=_I),
    # Text: letters, numbers, punctuation, symbols and separators, plus CR and LF.
    SignatureDefinition(
        id="text",
        type="text",
        subtype="plain",
        text_pattern=CategoryPattern(frozenset("LNPSZ"), frozenset("\r\n")),
    ),
    _sig(
        "markdown",
        "text",
        "markdown",
        pattern=r"^\s*(#{1,6}\s+\w+|\*\s+\w+|-\s+\w+|\d+\.\s+\w+|\[.+\]\(http.+)",
        flags=_I,
    ),
)


KNOWN_SUBTYPES: Mapping[str, Tuple[str, ...]] = {
    "image": (
        "jpeg",
        "png",
        "gif",
        "tiff",
        "bmp",
        "x-icon",
        "webp",
        "svg+xml",
    ),
    "video": (
        "mp4",
        "quicktime",
        "x-msvideo",
        "x-matroska",
        "webm",
        "x-flv",
    ),
    "audio": (
        "mpeg",
        "ogg",
        "wav",
    ),
    "application": (
        # Structured
        "x-www-form-urlencoded",
        "octet-stream",
        # Compressed
        "pdf",
        "zip",
        "x-rar-compressed",
        "gzip",
        "x-7z-compressed",
        "x-tar",
        # Microsoft Office
        "vnd.msword",
        "vnd.ms-excel",
        "vnd.ms-powerpoint",
        "vnd.openxmlformats-officedocument.wordprocessingml.document",
        "vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "vnd.openxmlformats-officedocument.presentationml.presentation",
        # Code
        "x-sh",
        "json",
        "xml",
        "javascript",
        "x-httpd-php",
        "x-yaml",
        "sql",
        "x-powershell",
        "x-bat",
        "x-pem-file",
        "x-latex",
        "rtf",
    ),
    "text": (
        "html",
        "x-ruby",
        "x-python",
        "x-java-source",
        "css",
        "csv",
        "x-go",
        "x-groovy",
        "x-kotlin",
        "x-rust",
        "x-typescript",
        "x-swift",
        "x-perl",
        "x-csrc",
        "x-c++src",
        "x-csharp",
        "x-vb",
        "x-chdr",
        "x-r-source",
        "markdown",
        "plain",
    ),
    "multipart": ("form-data",),
    "font": (
        "woff",
        "woff2",
        "ttf",
        "otf",
    ),
}


FILE_EXTENSIONS: Mapping[str, Tuple[str, ...]] = {
    "text": ("doc", "docx", "eml", "msg", "odt", "pages", "rtf", "tex", "txt", "wpd"),
    "data": (
        "aae", "bin", "csv", "dat", "key", "log", "mpp", "obb", "ppt", "pptx",
        "rpt", "tar", "vcf", "xml",
    ),
    "audio": ("aif", "flac", "m3u", "m4a", "mid", "mp3", "ogg", "wav", "wma"),
    "video": (
        "3gp", "asf", "avi", "flv", "m4v", "mov", "mp4", "mpg", "srt", "swf",
        "ts", "vob", "wmv",
    ),
    "3d-image": ("3dm", "3ds", "blend", "dae", "fbx", "max", "obj"),
    "raster-image": ("bmp", "dcm", "dds", "djvu", "gif", "heic", "jpg", "png", "psd", "tga", "tif"),
    "vector-image": ("ai", "cdr", "emf", "eps", "ps", "sketch", "svg", "vsdx"),
    "page-layout": ("indd", "oxps", "pdf", "pmd", "pub", "qxp", "xps"),
    "spreadsheet": ("numbers", "ods", "xlr", "xls", "xlsx"),
    "database": ("accdb", "crypt14", "db", "mdb", "odb", "pdb", "sql", "sqlite"),
    "executable": ("apk", "app", "bat", "bin", "cmd", "com", "exe", "ipa", "jar", "run", "sh"),
    "game": ("bin", "dem", "gam", "gba", "nes", "pak", "pkg", "rom", "sav"),
    "cad": ("dgn", "dwg", "dxf", "step", "stl", "stp"),
    "gis": ("gpx", "kml", "kmz", "osm"),
    "web": ("asp", "aspx", "cer", "cfm", "csr", "css", "html", "js", "json", "jsp", "php", "xhtml"),
    "plugin": ("crx", "ecf", "plugin", "safariextz", "xpi"),
    "font": ("fnt", "otf", "ttf", "woff", "woff2"),
    "system": (
        "ani", "cab", "cpl", "cur", "deskthemepack", "dll", "dmp", "drv", "icns",
        "ico", "lnk", "reg", "sys",
    ),
    "settings": ("cfg", "ini", "pkg", "set"),
    "encoded": ("asc", "bin", "enc", "mim", "uue"),
    "compressed": ("7z", "cbr", "deb", "gz", "pkg", "rar", "rpm", "tar.gz", "xapk", "zip", "zipx"),
    "disk-image": ("bin", "dmg", "img", "iso", "mdf", "rom", "vcd"),
    "developer": (
        "appx", "c", "class", "config", "cpp", "cs", "h", "java", "kt", "lua",
        "m", "md", "pl", "py", "sb3", "sln", "swift", "unity", "vb", "vcxproj",
        "xcodeproj", "yml",
    ),
    "backup": ("abk", "arc", "bak", "tmp"),
    "misc": ("crdownload", "ics", "msi", "nomedia", "part", "pkpass", "torrent"),
}


def _build_extension_index() -> Dict[str, Tuple[str, ...]]:
    index: Dict[str, list] = {}
    for category, extensions in FILE_EXTENSIONS.items():
        for extension in extensions:
            categories = index.setdefault(extension, [])
            if category not in categories:
                categories.append(category)
    return {extension: tuple(categories) for extension, categories in index.items()}


_EXTENSION_INDEX = _build_extension_index()


def normalize_extension(name: str) -> str:
    """Lowercase ``name`` and drop a single leading dot."""

    cleaned = name.strip().lower()
    if cleaned.startswith("."):
        cleaned = cleaned[1:]
    return cleaned


def extension_categories(name: str) -> Tuple[str, ...]:
    """Return the categories listing ``name`` (empty when unknown)."""

    return _EXTENSION_INDEX.get(normalize_extension(name), ())


def is_known_extension(name: str) -> bool:
    return bool(extension_categories(name))
