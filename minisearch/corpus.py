"""
Document loading for the command line tools.

Reads a folder of .html/.htm, .json and .txt files into the identifier -> text
map that build_index() consumes. HTML is reduced to its visible text with
BeautifulSoup (lxml parser). JSON files carry {"url", "content", "title"?};
the url (fragment stripped) becomes the identifier when present.
"""

import json
import logging
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlparse

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, XMLParsedAsHTMLWarning

warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

logger = logging.getLogger(__name__)

HTML_SUFFIXES = (".html", ".htm")
SUFFIXES = HTML_SUFFIXES + (".json", ".txt")
ENCODINGS = ("utf-8", "latin-1", "cp1252")


@dataclass
class Corpus:
    texts: dict[str, str] = field(default_factory=dict)
    titles: dict[str, str] = field(default_factory=dict)
    failed: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.texts)


def strip_fragment(url: str) -> str:
    """Remove URL fragment (#...) so anchors map to the same document."""
    parsed = urlparse(url)
    if parsed.fragment:
        parsed = parsed._replace(fragment="")
    return parsed.geturl()


def extract_text_from_html(html_content: str) -> str:
    """Visible text of an HTML page, without script/style/noscript."""
    soup = BeautifulSoup(html_content, "lxml")
    for element in soup(["script", "style", "noscript"]):
        element.decompose()
    return soup.get_text(separator=" ", strip=True)


def extract_title(html_content: str) -> str:
    soup = BeautifulSoup(html_content, "lxml")
    if soup.title is None:
        return ""
    return soup.title.get_text(strip=True)


def read_text_file(filepath: Path, encodings: tuple[str, ...] = ENCODINGS) -> str:
    """Decode a document with the first encoding in `encodings` that fits."""
    data = Path(filepath).read_bytes()
    for encoding in encodings:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            logger.debug("%s is not %s", filepath, encoding)
    raise ValueError(f"{filepath} does not decode as any of {', '.join(encodings)}")


def _looks_like_html(text: str) -> bool:
    head = text.lstrip()[:512].lower()
    return head.startswith("<") and ("<html" in head or "<body" in head or "<!doctype" in head)


def read_document(filepath: Path, identifier: str) -> tuple[str, str, str]:
    """
    Return (identifier, text, title) for one file.
    - .json: identifier from "url" (fragment stripped) if present; "content" required.
    - .html/.htm: visible text and <title>.
    - .txt: raw text, no title.
    """
    filepath = Path(filepath)
    suffix = filepath.suffix.lower()
    raw = read_text_file(filepath)

    if suffix == ".json":
        data = json.loads(raw)
        if not isinstance(data, dict) or "content" not in data:
            raise ValueError(f"JSON file has no 'content' field: {filepath}")
        content = data["content"]
        if content is None:
            content = ""
        if not isinstance(content, str):
            raise ValueError(f"JSON 'content' must be a string: {filepath}")
        url = data.get("url")
        if url is not None and not isinstance(url, str):
            raise ValueError(f"JSON 'url' must be a string: {filepath}")
        if url:
            identifier = strip_fragment(url)
        title = data.get("title")
        if not isinstance(title, str):
            title = ""
        if _looks_like_html(content):
            title = title or extract_title(content)
            content = extract_text_from_html(content)
        return identifier, content, title

    if suffix in HTML_SUFFIXES:
        return identifier, extract_text_from_html(raw), extract_title(raw)

    return identifier, raw, ""


def load_documents(data_dir: Path) -> Corpus:
    """
    Load every supported file under data_dir (recursive, sorted by path so
    doc ids are reproducible). Unreadable files are logged and skipped.
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise FileNotFoundError(f"Document folder not found: {data_dir}")

    corpus = Corpus()
    doc_files = sorted(
        (p for p in data_dir.rglob("*") if p.is_file() and p.suffix.lower() in SUFFIXES),
        key=lambda p: str(p),
    )
    for filepath in doc_files:
        rel = str(filepath.relative_to(data_dir)).replace("\\", "/")
        try:
            identifier, text, title = read_document(filepath, rel)
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s: %s", filepath, e)
            corpus.failed.append(rel)
            continue
        if identifier in corpus.texts:
            logger.warning("Duplicate identifier %s (from %s); keeping the first", identifier, rel)
            continue
        corpus.texts[identifier] = text
        if title:
            corpus.titles[identifier] = title

    logger.info("Loaded %d documents from %s", len(corpus.texts), data_dir)
    return corpus
