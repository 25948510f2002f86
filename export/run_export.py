# Export a saved DeepSeek chat page as Markdown.
# Loads sources.yaml, reads the page, builds the conversation turns, assembles
# the Markdown and hands it to a sink (file or clipboard).
#
#   python -m export.run_export page.html --mode clipboard

import argparse
import enum
import logging
import os
import sys
from pathlib import Path

import yaml

from ingest.extract_turns import SELECTORS, extract_conversation
from ingest.html_to_markdown import REMOVALS

from .assemble import LABELS, assemble
from .errors import ConversionFailure, EmptyConversation
from .sinks import make_sink

DEFAULT_CFG = {
    "paths": {"output_dir": "data/exports"},
    "selectors": dict(SELECTORS),
    "removals": list(REMOVALS),
    "labels": dict(LABELS),
}


def setup_logger(level=logging.INFO):
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
        force=True
    )


def merge_cfg(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = merge_cfg(out[k], v)
        else:
            out[k] = v
    return out


# open sources.yaml and lay it over the built-in defaults
def load_cfg(path="sources.yaml") -> dict:
    if not os.path.exists(path):
        logging.warning(f"Config {path} not found, using defaults")
        return merge_cfg(DEFAULT_CFG, {})
    with open(path, "r", encoding="utf-8") as f:
        return merge_cfg(DEFAULT_CFG, yaml.safe_load(f) or {})


def read_page(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def page_source(path: str, cfg: dict):
    def source():
        convo = extract_conversation(read_page(path), cfg)
        return convo.title, convo.turns
    return source


def notify(message: str, is_error: bool = False):
    if is_error:
        logging.error(message)
    else:
        logging.info(message)


class ExportState(enum.Enum):
    IDLE = "idle"
    EXPORTING = "exporting"


class Exporter:
    """One export at a time: a request made while another is running is
    ignored (returns None) and touches neither the source nor the sink."""

    def __init__(self, source, sink, labels=None):
        self.source = source
        self.sink = sink
        self.labels = labels
        self.state = ExportState.IDLE

    def export(self):
        if self.state is ExportState.EXPORTING:
            logging.debug("Export already running, request ignored")
            return None
        self.state = ExportState.EXPORTING
        try:
            title, turns = self.source()
            if not turns:
                raise EmptyConversation()

            content = assemble(title, turns, self.labels)
            if not content.strip():
                raise EmptyConversation()

            fallback = {**LABELS, **(self.labels or {})}["fallback_title"]
            self.sink(content, (title or "").strip() or fallback)
            return content
        except EmptyConversation:
            raise
        except Exception as e:
            raise ConversionFailure(f"Export failed: {e}") from e
        finally:
            self.state = ExportState.IDLE


def build_parser():
    parser = argparse.ArgumentParser(
        prog="deepseek-export",
        description="Export a saved DeepSeek chat page as Markdown",
    )
    parser.add_argument("page", help="Saved chat page (.html), or - for stdin")
    parser.add_argument(
        "-m", "--mode", choices=["file", "clipboard"], default="file",
        help="Write {title}.md (default) or copy to the clipboard",
    )
    parser.add_argument("-o", "--out", help="Output directory for file mode")
    parser.add_argument("-c", "--config", default="sources.yaml", help="YAML config path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(logging.DEBUG if args.verbose else logging.INFO)
    cfg = load_cfg(args.config)

    out_dir = args.out or cfg["paths"]["output_dir"]
    sink = make_sink(args.mode, out_dir)
    exporter = Exporter(page_source(args.page, cfg), sink, cfg["labels"])

    try:
        exporter.export()
    except EmptyConversation as e:
        notify(str(e), is_error=True)
        return 1
    except ConversionFailure as e:
        notify(str(e), is_error=True)
        return 2

    notify(sink.describe())
    return 0


if __name__ == "__main__":
    sys.exit(main())
