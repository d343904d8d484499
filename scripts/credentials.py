import os
from pathlib import Path

TOKEN_ENV_VAR = "TIDBYT_API_TOKEN"


def load_api_token(path: Path | str = "scripts/.credentials") -> str:
    """Load the Tidbyt API token.

    The ``TIDBYT_API_TOKEN`` environment variable wins when set. Otherwise
    the file is read, accepting either:
    token=...
    or a single line holding only the token.

    Raises:
        FileNotFoundError: If no env var is set and the file does not exist.
        ValueError: If the token can't be found.
    """
    token = os.environ.get(TOKEN_ENV_VAR)
    if token:
        return token

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(
            f"Set {TOKEN_ENV_VAR} or create a credentials file: {p}"
        )

    lines = [
        ln.strip()
        for ln in p.read_text(encoding="utf-8").splitlines()
        if ln.strip() and not ln.strip().startswith("#")
    ]
    if not lines:
        raise ValueError("Credentials file is empty")

    # key=value format
    if any("=" in ln for ln in lines):
        data: dict[str, str] = {}
        for ln in lines:
            if "=" in ln:
                k, v = ln.split("=", 1)
                data[k.strip().lower()] = v.strip()
        token = data.get("token") or data.get("api_token")
        if not token:
            raise ValueError("Credentials file must contain token=...")
        return token

    return lines[0]
