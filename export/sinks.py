# Where a finished export goes: a {title}.md file or the system clipboard.
# Sinks take the Markdown as-is; they never rewrite it.

import logging
import os
from pathlib import Path

import pyperclip

FALLBACK_FILENAME = "conversation"
FORBIDDEN_CHARS = '<>:"/\\|?*'  # Windows-illegal, plus the path separator


def sanitize_filename(name: str) -> str:
    name = (name or "").strip()
    for ch in FORBIDDEN_CHARS:
        name = name.replace(ch, "_")
    name = "".join(ch for ch in name if ch >= " ")
    return name[:120].strip(" ._") or FALLBACK_FILENAME


class FileSink:
    mode = "file"

    def __init__(self, out_dir: str = "."):
        self.out_dir = out_dir
        self.last_path = None

    def __call__(self, markdown: str, title: str) -> Path:
        os.makedirs(self.out_dir, exist_ok=True)
        path = Path(self.out_dir) / f"{sanitize_filename(title)}.md"
        with open(path, "w", encoding="utf-8") as f:
            f.write(markdown)
        self.last_path = path
        logging.debug(f"Wrote {len(markdown)} chars → {path}")
        return path

    def describe(self) -> str:
        return f"Conversation saved to {self.last_path}"


class ClipboardSink:
    mode = "clipboard"

    def __call__(self, markdown: str, title: str) -> None:
        pyperclip.copy(markdown)
        logging.debug(f"Copied {len(markdown)} chars to clipboard")

    def describe(self) -> str:
        return "Conversation copied to clipboard"


def make_sink(mode: str, out_dir: str = "."):
    if mode == "file":
        return FileSink(out_dir)
    if mode == "clipboard":
        return ClipboardSink()
    raise ValueError(f"Unknown export mode: {mode}")
