"""Read-only query façade over already-acquired documentation."""

from go_docs_mcp.models import BuiltinFunction, SourceArchive, StdLibItem
from go_docs_mcp.stdlib import find_item, search_items, stdlib_items


class QuerySurface:
    """Answers list/get/search queries from in-memory data.

    Never touches the network or the cache; everything is handed in at
    construction time by the acquisition pipelines.
    """

    def __init__(
        self,
        version: str,
        builtin_functions: list[BuiltinFunction],
        archive: SourceArchive,
        stdlib: list[StdLibItem] | None = None,
    ):
        self.version = version
        self.archive = archive
        self._builtins = list(builtin_functions)
        self._by_name = {fn.name: fn for fn in self._builtins}
        self._stdlib = stdlib if stdlib is not None else stdlib_items()

    def list_builtin_functions(self) -> list[BuiltinFunction]:
        return list(self._builtins)

    def get_builtin_function(self, name: str) -> BuiltinFunction | None:
        return self._by_name.get(name.strip())

    def search_std_lib(self, query: str, limit: int = 10) -> list[StdLibItem]:
        return search_items(self._stdlib, query, limit)

    def get_std_lib_item(self, name: str) -> StdLibItem | None:
        return find_item(self._stdlib, name)
