from __future__ import annotations

from typing import Dict, Iterable, Iterator, List

from .module import Module


class ModuleCatalog:
    def __init__(self, modules: Iterable[Module]):
        self.modules: List[Module] = []
        self._by_code: Dict[str, Module] = {}
        for m in modules:
            if m.code in self._by_code:
                raise ValueError(f"duplicate module code {m.code}")
            self.modules.append(m)
            self._by_code[m.code] = m

    def __iter__(self) -> Iterator[Module]:
        return iter(self.modules)

    def __len__(self) -> int:
        return len(self.modules)

    def get(self, code: str) -> Module | None:
        return self._by_code.get(code)

    def codes(self) -> List[str]:
        return [m.code for m in self.modules]
