"""SQL file loader utility with caching."""

from pathlib import Path


class SQLLoader:
    """Loads and caches SQL files from a domain's sql directory.

    캐시된 파일도 수정 시각이 바뀌면 디스크에서 다시 읽는다.
    """

    def __init__(
        self, domain: str, base_path: Path | None = None, enable_cache: bool = True
    ) -> None:
        """Initialize SQL loader.

        Args:
            domain: Domain name (e.g., 'users', 'depts')
            base_path: Base path for domains directory
            enable_cache: Enable in-memory caching (default: True)
        """
        self.domain = domain
        if base_path is None:
            base_path = Path(__file__).parent.parent.parent / "domains"
        self.sql_path = base_path / domain / "sql"
        self.enable_cache = enable_cache
        self._cache: dict[str, str] = {}
        self._mtime_cache: dict[str, float] = {}

    def load(self, filename: str, force_reload: bool = False) -> str:
        """Load a SQL file with optional caching.

        Args:
            filename: SQL file path relative to domain/sql directory
            force_reload: Force reload from disk even if cached

        Returns:
            SQL query string

        Raises:
            FileNotFoundError: If SQL file does not exist
        """
        file_path = self.sql_path / filename

        if not file_path.exists():
            raise FileNotFoundError(f"SQL file not found: {file_path}")

        if self.enable_cache and not force_reload:
            cached_mtime = self._mtime_cache.get(filename)
            if cached_mtime is not None and file_path.stat().st_mtime <= cached_mtime:
                return self._cache[filename]

        content = file_path.read_text(encoding="utf-8").strip()

        if self.enable_cache:
            self._cache[filename] = content
            self._mtime_cache[filename] = file_path.stat().st_mtime

        return content

    def load_query(self, filename: str, force_reload: bool = False) -> str:
        """Load a SQL query file from queries/ subdirectory.

        Args:
            filename: Query filename without .sql extension
            force_reload: Force reload from disk
        """
        return self.load(f"queries/{filename}.sql", force_reload=force_reload)

    def clear_cache(self) -> None:
        """Clear all cached SQL queries."""
        self._cache.clear()
        self._mtime_cache.clear()


# Global cache for SQLLoader instances (one per domain)
_loader_instances: dict[str, SQLLoader] = {}


def create_sql_loader(domain: str, enable_cache: bool = True) -> SQLLoader:
    """Create or retrieve a cached SQL loader for a specific domain.

    Args:
        domain: Domain name (e.g., 'users', 'depts')
        enable_cache: Enable SQL query caching (default: True)

    Returns:
        SQLLoader instance for the domain
    """
    if domain not in _loader_instances:
        _loader_instances[domain] = SQLLoader(domain, enable_cache=enable_cache)
    return _loader_instances[domain]
