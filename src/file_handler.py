"""Firmware intake: read an uploaded file into the engine's input triple.

The engine never touches the filesystem; this module reads the file, checks
it is a supported firmware/text upload and hands back its name, size and
content. It also wires Tk drag & drop and the file dialog to that reader.
"""

import datetime
import logging
import mimetypes
from pathlib import Path
from typing import Optional

from core import engine

logger = logging.getLogger(__name__)

ACCEPTED_EXTENSIONS = (".bin", ".img", ".txt")


class FileHandler:
    def __init__(self, max_bytes: Optional[int] = None):
        self.max_bytes = max_bytes

    def handle_input(self, input_path: str) -> dict:
        input_path = (input_path or "").strip()
        if not input_path:
            raise ValueError("Empty input.")

        if input_path.startswith(("http://", "https://")):
            raise ValueError("Only local firmware files can be analyzed.")

        p = Path(input_path)
        if p.is_file():
            return self._handle_file(p)

        raise ValueError(f"Unsupported input: {input_path}")

    def _handle_file(self, filepath: Path) -> dict:
        mime = mimetypes.guess_type(str(filepath))[0] or "application/octet-stream"
        if not is_supported(filepath.name, mime):
            raise ValueError("Please upload a .bin, .img, or text file")

        size = filepath.stat().st_size
        if self.max_bytes is not None and size > self.max_bytes:
            raise ValueError(
                f"{filepath.name} is {size} bytes; the limit is {self.max_bytes} bytes."
            )

        content = filepath.read_bytes()
        logger.debug("Read %s (%d bytes, %s)", filepath, len(content), mime)
        return {
            "filename": filepath.name,
            "filetype": mime,
            "category": categorize_file(filepath.name, mime),
            "size": len(content),
            "uploaded_at": datetime.datetime.now().isoformat(timespec="seconds"),
            "path": str(filepath),
            "content": content,
        }


def is_supported(name: str, mime_type: str) -> bool:
    return name.lower().endswith(ACCEPTED_EXTENSIONS) or mime_type == "text/plain"


def categorize_file(path: str, mime_type: str) -> str:
    ext = Path(path).suffix.lower()
    if ext == ".bin":
        return "firmware-bin"
    if ext == ".img":
        return "firmware-img"
    if ext == ".txt" or (mime_type or "").startswith("text/"):
        return "text"
    return "unknown"


# -------- Drag & Drop (Tk / tkinterdnd2) -------------------------------------


def _strip_file_uri(token: str) -> str:
    if token.startswith("file://"):
        token = token[len("file://"):]
        # Windows file:// may have leading /C:/
        if token.startswith("/") and len(token) > 3 and token[2] == ":":
            token = token[1:]
    return token


def parse_drop_data(data: str):
    r"""
    Convert tkdnd event data -> list of paths.
    Handles `{C:\My File.bin}` braced tokens, plain whitespace-separated
    tokens and file:// URIs.
    """
    if not data:
        return []

    out = []
    buf = []
    in_brace = False
    for ch in data:
        if in_brace:
            if ch == "}":
                out.append(_strip_file_uri("".join(buf)))
                buf = []
                in_brace = False
            else:
                buf.append(ch)
        elif ch == "{":
            in_brace = True
            if buf:
                out.append(_strip_file_uri("".join(buf)))
                buf = []
        elif ch.isspace():
            if buf:
                out.append(_strip_file_uri("".join(buf)))
                buf = []
        else:
            buf.append(ch)

    if buf:
        out.append(_strip_file_uri("".join(buf)))
    return out


class FileDropController:
    """
    Glue between a Tk/CTk widget (drop target) and FileHandler.
    Only the first dropped file is analyzed, as with the file dialog.
    The widget's toplevel must already have tkdnd loaded.
    """

    def __init__(self, target_widget, file_handler: FileHandler, on_processed, on_status=None, on_border=None):
        self.widget = target_widget
        self.fh = file_handler
        self.on_processed = on_processed
        self.on_status = on_status or (lambda msg, error=False: None)
        self.on_border = on_border or (lambda color: None)

        try:
            import tkinterdnd2 as _tkdnd  # type: ignore
        except ImportError as e:
            raise RuntimeError(
                f"Drag & drop unavailable: tkinterdnd2 import failed: {e}"
            ) from e

        self.widget.drop_target_register(_tkdnd.DND_FILES)
        self.widget.dnd_bind("<<DragEnter>>", self._on_drag_enter)
        self.widget.dnd_bind("<<DragLeave>>", self._on_drag_leave)
        self.widget.dnd_bind("<<Drop>>", self._on_drop)

    def _on_drag_enter(self, _evt):
        self.on_border("#2389DA")

    def _on_drag_leave(self, _evt):
        self.on_border(None)

    def _on_drop(self, event):
        self.on_border(None)
        paths = parse_drop_data(getattr(event, "data", ""))
        if not paths:
            return
        try:
            meta = self.fh.handle_input(paths[0])
        except (OSError, ValueError) as e:
            self.on_status(str(e), error=True)
            return
        self.on_processed(meta)


def open_file_picker(parent, file_handler: FileHandler, on_processed, on_status=None):
    """
    Ask for one firmware file and feed it to FileHandler.

    - on_processed: callback(meta: dict) for the file that was read
    - on_status: optional callback(message: str, error: bool=False)
    """
    from tkinter import filedialog

    path = filedialog.askopenfilename(
        parent=parent,
        title="Select Firmware File",
        filetypes=[("Firmware", "*.bin *.img"), ("Text", "*.txt"), ("All files", "*")],
    )
    if not path:
        return
    try:
        meta = file_handler.handle_input(path)
    except (OSError, ValueError) as e:
        if on_status:
            on_status(str(e), error=True)
        return
    on_processed(meta)


def analyze_upload(meta: dict, catalog, on_done, on_error) -> None:
    """
    Analyze an uploaded file's content and hand the outcome to a callback.

    Meant to run on a worker thread: exactly one of on_done(report) or
    on_error(message) is called, so the caller can always leave its busy state.
    """
    try:
        report = engine.analyze(
            meta["content"], meta["filename"], meta["size"], catalog=catalog
        )
    except Exception as e:
        logger.exception("Analysis of %s failed", meta.get("filename"))
        on_error(f"Analysis failed: {e}")
        return
    on_done(report)
