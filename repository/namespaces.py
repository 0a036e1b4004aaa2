# repository/namespaces.py
from typing import Final

ROOT: Final[str] = "gpps"

NODES: Final[str] = f"{ROOT}:nodes"  # one hash per owner scope: field=node id
