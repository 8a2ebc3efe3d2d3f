from __future__ import annotations

USER_AGENT = "treemagic-Client/0.1.0"
