import os
from pathlib import Path
from typing import Union


def create_sized_file(path: Union[str, os.PathLike], size_bytes: int) -> Path:
    """
    Create a zero-filled file of an exact size

    Args:
        path: Local file path
        size_bytes: Number of bytes to write

    Returns:
        Path of the created file
    """
    if size_bytes < 0:
        raise ValueError("size_bytes must not be negative")

    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "wb") as f:
        f.write(bytes(size_bytes))
    return file_path


def create_text_file(path: Union[str, os.PathLike], content: str) -> Path:
    """Create a UTF-8 text file with the given content, creating parent directories"""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    return file_path
