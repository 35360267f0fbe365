"""Document loaders — thin wrappers around LangChain document loaders.

Parsing rich formats (PDF, DOCX, …) is the job of an upstream document
parser; these helpers only read plain text and Markdown from disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from langchain_community.document_loaders import DirectoryLoader, TextLoader

if TYPE_CHECKING:
    from langchain_core.documents import Document


def load_directory(path: str | Path, glob: str = "**/*.md") -> list[Document]:
    """Recursively load every file matching *glob* under *path*.

    Parameters
    ----------
    path:
        Root directory containing source documents.
    glob:
        File-matching pattern forwarded to ``DirectoryLoader``.

    Returns
    -------
    list[Document]
        One document per file, with the file path in ``metadata["source"]``.
    """
    loader = DirectoryLoader(
        str(path),
        glob=glob,
        loader_cls=TextLoader,  # type: ignore[arg-type]
        loader_kwargs={"encoding": "utf-8"},
        show_progress=False,
        use_multithreading=True,
    )
    return loader.load()


def load_text(path: str | Path) -> list[Document]:
    """Load a single text or Markdown file."""
    return TextLoader(str(path), encoding="utf-8").load()
