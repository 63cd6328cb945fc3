"""Static HTML generation for a ModuleDoc."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from jinja2 import Environment, FileSystemLoader

from ..logging import get_logger
from ..models import FoundInFile, ModuleDoc, PackageDoc
from ..output import PAGE_SUFFIX, ensure_output_dir, remove_stale_pages
from .links import SymbolLinker

INDEX_PAGE = f"index{PAGE_SUFFIX}"
ROOT_PAGE_STEM = "_root"

_SENTENCE_END = re.compile(r"\.(\s|$)")


def page_name(relative_path: str) -> str:
    """Page file name for a unit path: `/a/b` -> `a.b.html`, `/` -> `_root.html`.

    Inside a segment `_` becomes `__` and `.` becomes `_.`, so `/a.b` maps to
    `a_.b.html` and never meets `/a/b`. Encoded segments only ever start with
    `_` as `__` or `_.`, which leaves `_root` and `_index` free for the root
    unit and a top-level `index` package.
    """
    segments = [segment for segment in relative_path.split("/") if segment]
    if not segments:
        return f"{ROOT_PAGE_STEM}{PAGE_SUFFIX}"
    slug = ".".join(segment.replace("_", "__").replace(".", "_.") for segment in segments)
    if f"{slug}{PAGE_SUFFIX}" == INDEX_PAGE:
        slug = f"_{slug}"
    return f"{slug}{PAGE_SUFFIX}"


def synopsis(doc: str) -> str:
    """First sentence of the first paragraph of `doc`."""
    paragraph = doc.strip().split("\n\n", 1)[0].replace("\n", " ")
    match = _SENTENCE_END.search(paragraph)
    return paragraph[: match.start() + 1] if match else paragraph


def doc_blocks(doc: str) -> List[Tuple[str, str]]:
    """Split doc text into `("p", text)` paragraphs and `("pre", text)` indented blocks."""
    blocks: List[Tuple[str, str]] = []
    for chunk in re.split(r"\n\s*\n", doc.strip()):
        if not chunk.strip():
            continue
        lines = chunk.split("\n")
        if all(line[:1] in {" ", "\t"} for line in lines if line.strip()):
            blocks.append(("pre", "\n".join(line[1:] for line in lines)))
        else:
            blocks.append(("p", " ".join(line.strip() for line in lines)))
    return blocks


def package_anchors(package: PackageDoc) -> Set[str]:
    anchors: Set[str] = set()
    for definition in package.definitions():
        anchors.add(definition.anchor)
        anchors.update(getattr(definition, "names", ()))
    return anchors


class HtmlRenderer:
    """Writes `index.html` plus one page per compilation unit."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)
        self.logger = get_logger("render")

    def generate(self, model: Optional[ModuleDoc], out_dir: Path | str) -> List[Path]:
        """Render `model` into `out_dir`, replacing previously generated pages."""
        if model is None:
            self.logger.debug("No document model available; nothing to render")
            return []

        target = ensure_output_dir(out_dir)
        pages = self.render(model)
        remove_stale_pages(target, pages)

        written: List[Path] = []
        for name, html in pages.items():
            path = target / name
            path.write_text(html, encoding="utf-8")
            written.append(path)
        self.logger.info("Wrote %d pages to %s", len(written), target)
        return written

    def render(self, model: ModuleDoc) -> Dict[str, str]:
        """Return `page name -> html` without touching the filesystem."""
        packages = sorted(model.packages, key=lambda package: package.relative_path)
        pages = {package.relative_path: page_name(package.relative_path) for package in packages}
        linker = SymbolLinker(
            model.exports,
            pages,
            {package.relative_path: package_anchors(package) for package in packages},
        )

        def location(found: FoundInFile) -> str:
            try:
                shown = Path(found.filename).relative_to(model.absolute_path).as_posix()
            except ValueError:
                shown = found.filename
            return f"{shown}:{found.line}"

        rendered: Dict[str, str] = {
            INDEX_PAGE: self._env.get_template("index.html.j2").render(
                module=model,
                packages=packages,
                pages=pages,
                synopsis=synopsis,
                index_page=INDEX_PAGE,
            )
        }
        template = self._env.get_template("package.html.j2")
        for package in packages:
            rendered[pages[package.relative_path]] = template.render(
                module=model,
                package=package,
                index_page=INDEX_PAGE,
                doc_blocks=doc_blocks,
                location=location,
                link=lambda snippet, current=package.relative_path: linker.link(snippet, current),
            )
        return rendered

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        return Environment(
            loader=FileSystemLoader(directories),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )


__all__ = ["HtmlRenderer", "INDEX_PAGE", "doc_blocks", "package_anchors", "page_name", "synopsis"]
