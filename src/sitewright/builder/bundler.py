"""
Rewrites bare ES module specifiers in the build so browsers can load them.

`import x from "pkg"` becomes `import x from "/spa/web_modules/pkg/<entry>"`,
with the package copied out of `node_modules`. Problems are logged here and
never raised: a build that bundles badly is still a build.
"""

from collections import deque
import json
from pathlib import Path
import re
import shutil

from pyvider.telemetry import logger

WEB_MODULES_DIR = Path("spa") / "web_modules"

# Holds JSON data exports only, never import statements.
GENERATED_DIR = Path("spa") / "generated"

IMPORT_RE = re.compile(
    r"""(?P<prefix>\b(?:import|export)\s[^;'"]*?\bfrom\s*|\bimport\s*\(?\s*)"""
    r"""(?P<quote>['"])(?P<spec>[^'"]+)(?P=quote)"""
)


def _is_bare(specifier: str) -> bool:
    return not (
        specifier.startswith((".", "/"))
        or "://" in specifier
        or specifier.startswith(("node:", "data:"))
    )


def _split_specifier(specifier: str) -> tuple[str, str]:
    """Returns the package name and any subpath, handling @scoped names."""
    parts = specifier.split("/")
    count = 2 if specifier.startswith("@") else 1
    return "/".join(parts[:count]), "/".join(parts[count:])


def _package_entry(package_dir: Path) -> str:
    manifest = package_dir / "package.json"
    if manifest.is_file():
        data = json.loads(manifest.read_text(encoding="utf-8"))
        for key in ("module", "browser", "main"):
            entry = data.get(key)
            if isinstance(entry, str) and entry:
                return entry.removeprefix("./")
    return "index.js"


class _Bundler:
    def __init__(self, build_path: Path, node_modules: Path) -> None:
        self.build_path = build_path
        self.node_modules = node_modules
        self.web_modules = build_path / WEB_MODULES_DIR
        self.copied: set[str] = set()
        self.queue: deque[Path] = deque()

    def resolve(self, specifier: str) -> str | None:
        package, subpath = _split_specifier(specifier)
        package_dir = self.node_modules / package
        if not package_dir.is_dir():
            return None

        dest_dir = self.web_modules / package
        if package not in self.copied:
            shutil.copytree(
                package_dir,
                dest_dir,
                ignore=shutil.ignore_patterns("node_modules"),
                dirs_exist_ok=True,
            )
            self.copied.add(package)
            self.queue.extend(p for p in dest_dir.rglob("*.js") if p.is_file())
            logger.debug(f"Copied module '{package}' to '{dest_dir}'")

        entry = subpath or _package_entry(package_dir)
        if not Path(entry).suffix:
            entry += ".js"
        return "/" + (WEB_MODULES_DIR / package / entry).as_posix()

    def rewrite(self, source: Path) -> None:
        text = source.read_text(encoding="utf-8")

        def replace(match: re.Match[str]) -> str:
            specifier = match.group("spec")
            if not _is_bare(specifier):
                return match.group(0)
            resolved = self.resolve(specifier)
            if resolved is None:
                logger.warning(
                    f"Could not resolve module '{specifier}'", file=str(source)
                )
                return match.group(0)
            quote = match.group("quote")
            return f"{match.group('prefix')}{quote}{resolved}{quote}"

        rewritten = IMPORT_RE.sub(replace, text)
        if rewritten != text:
            source.write_text(rewritten, encoding="utf-8")

    def run(self) -> None:
        spa = self.build_path / "spa"
        if spa.is_dir():
            generated = self.build_path / GENERATED_DIR
            self.queue.extend(
                p
                for p in sorted(spa.rglob("*.js"))
                if p.is_file() and not p.is_relative_to(generated)
            )
        while self.queue:
            source = self.queue.popleft()
            try:
                self.rewrite(source)
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.error(f"Could not bundle '{source}': {e}")


def bundle(build_path: Path, node_modules: Path = Path("node_modules")) -> None:
    """Post-processes module imports under `<build>/spa` in place."""
    logger.info(f"Resolving ES module imports in '{build_path}'")
    _Bundler(build_path, node_modules).run()
