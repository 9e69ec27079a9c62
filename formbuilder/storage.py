import os


class LocalStorage:
    """Presence checks for assets kept on the local disk under ``root``."""

    def __init__(self, root: str):
        self.root = root

    def path(self, key: str) -> str:
        return os.path.join(self.root, key)

    def exists(self, key: str) -> bool:
        if not key:
            return False
        return os.path.isfile(self.path(key))
