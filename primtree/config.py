from __future__ import annotations

import copy
import json
from itertools import count
from pathlib import Path
from typing import Any, Optional, Union

DEFAULTS = {
    'prim': {
        'strict': True,
        'trace': False,
    },
    'log': {
        'level': 'WARNING',
    },
}


def query_key(q: str, dct: dict) -> Any:
    node = dct
    path = []
    for key in q.split('.'):
        if not isinstance(node, dict):
            raise KeyError(f"{q!r}: '{'.'.join(path)}' is a "
                           f"{type(node).__name__}, not a section.")
        path.append(key)
        if key not in node:
            raise KeyError(f"{q!r}: no option '{'.'.join(path)}'.")
        node = node[key]
    return node


def set_key(q: str, value: Any, dct: dict):
    *sections, name = q.split('.')
    node = dct
    for i, key in enumerate(sections):
        node = node.setdefault(key, {})
        if not isinstance(node, dict):
            raise ValueError(f"{q!r}: '{'.'.join(sections[:i + 1])}' is a "
                             f"{type(node).__name__}, not a section.")
    if isinstance(node.get(name), dict) and not isinstance(value, dict):
        raise ValueError(
            f"{q!r}: can not replace a section with {type(value).__name__}.")
    node[name] = value


class Config(dict):
    """
    Builder and logging options

    A dict of nested sections, optionally backed by a JSON file. Values
    are read and written with dotted keys, e.g. ``cfg.query('prim.strict')``.
    """

    def __init__(self,
                 path: Optional[Union[str, Path]] = None,
                 backup: bool = False):
        super().__init__()
        self.update(copy.deepcopy(DEFAULTS))
        self.path = None if path is None else Path(path)
        self.backup = backup
        if self.path is not None and self.path.exists():
            self.reload()

    def reload(self):
        with self.path.open('r') as f:
            dct = json.load(f)
            self.clear()
            self.update(copy.deepcopy(DEFAULTS))
            self.update(dct)

    def commit(self):
        if self.path is None:
            raise ValueError("config has no path to commit to.")
        if self.backup and self.path.exists():
            for i in count():
                bk = self.path.parent / (self.path.stem + f"_{i}" +
                                         self.path.suffix)
                if not bk.exists():
                    break
            self.path.rename(bk)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open('w') as f:
            json.dump(self, f, indent=4)

    def update(self, other):

        def update(d, u):
            for k in u:
                if isinstance(u[k], dict):
                    if k not in d:
                        d[k] = u[k]
                    elif isinstance(d[k], dict):
                        update(d[k], u[k])
                    else:
                        raise TypeError(
                            f"can not merge section '{k}' into {type(d[k])}")
                else:
                    d[k] = u[k]

        update(self, other)

    def query(self, q: str) -> Any:
        return query_key(q, self)

    def set(self, q: str, value: Any):
        set_key(q, value, self)

    @classmethod
    def fromdict(cls, d: dict) -> Config:
        ret = cls()
        ret.update(d)
        return ret
