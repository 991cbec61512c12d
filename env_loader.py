"""Merkezi .env yukleyici. Hub maliyet varsayimlari, uygunluk kriterleri ve
karar logu ayarlari buradan gelir.

Scriptler bunu import etsin; zaten tanimli ortam degiskenleri ezilmez.
Farkli bir dosya icin DISTRIBUTION_ENV_FILE tanimlanabilir.
"""
import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent
ENV_PATH = Path(os.environ.get("DISTRIBUTION_ENV_FILE") or PROJECT_ROOT / ".env")


def load_env(path: Optional[Union[str, Path]] = None) -> bool:
    """Dosya bulunup en az bir degisken okunduysa True."""
    return load_dotenv(path or ENV_PATH, override=False)


load_env()
