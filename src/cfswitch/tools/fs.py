import os
from pathlib import Path
from tempfile import NamedTemporaryFile


def write_text_atomic(path: Path, content: str) -> None:
    """
    Write *content* to *path* by writing a temporary file in the same directory and renaming it over the target.
    Readers of *path* never observe a partially written file.

    The temporary file is created with mode `0600`, which the target inherits. Both files this is used for contain
    credentials.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    with NamedTemporaryFile("w", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False) as fp:
        tmp = Path(fp.name)
        try:
            fp.write(content)
            fp.flush()
            os.fsync(fp.fileno())
        except BaseException:
            fp.close()
            tmp.unlink(missing_ok=True)
            raise

    try:
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
