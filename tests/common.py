from pathlib import Path

TEST_FILE_DIR = Path(__file__).parent / "test_files"

CRLF = "\r\n"


def get_test_file(file_name: str) -> str:
    """Helper function to open and read test files, with CRLF line breaks."""
    filepath = TEST_FILE_DIR / file_name
    with open(filepath, "r", encoding="utf-8", newline="") as f:
        text = f.read()
    return text.replace(CRLF, "\n").replace("\n", CRLF)


def crlf(*lines: str) -> str:
    """Join lines into a directory stream, each ending in CRLF."""
    return "".join(line + CRLF for line in lines)
