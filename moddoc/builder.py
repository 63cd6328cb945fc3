"""Builds the ModuleDoc model from corpus output."""

from __future__ import annotations

from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, Dict, Optional, Sequence

from .errors import IndexerError, ModDocError
from .index.corpus import Corpus
from .index.types import FuncSpec, PackageInfo, TypeSpec, ValueSpec
from .logging import get_logger
from .models import (
    FieldSummary,
    FunctionDef,
    InterfaceDef,
    MethodDef,
    MethodSummary,
    ModuleDoc,
    PackageDoc,
    StructDef,
    ValueDef,
)
from .resolver import ModuleInfo
from .snippets import SnippetExtractor
from .xref import build_cross_reference, unit_paths

CorpusFactory = Callable[..., Corpus]


class DocumentModelBuilder:
    """Turns the corpus' identifier index and page data into a ModuleDoc."""

    def __init__(
        self,
        *,
        corpus_factory: CorpusFactory = Corpus,
        exclude_paths: Sequence[str] = (),
        index_timeout: Optional[float] = None,
    ) -> None:
        self._corpus_factory = corpus_factory
        self._exclude_paths = list(exclude_paths)
        self._index_timeout = index_timeout
        self.logger = get_logger("builder")

    def build(self, module: ModuleInfo) -> ModuleDoc:
        corpus = self._corpus_factory(module.root, exclude_paths=self._exclude_paths)
        try:
            index = corpus.start().result(timeout=self._index_timeout)
        except FutureTimeoutError as exc:
            raise IndexerError(
                f"Indexing {module.root} did not finish within {self._index_timeout}s"
            ) from exc
        except ModDocError:
            raise
        except Exception as exc:
            raise IndexerError(f"Indexing {module.root} failed: {exc}") from exc

        model = ModuleDoc(absolute_path=module.root, import_path=module.import_path)
        model.exports = build_cross_reference(index)
        model.exports.freeze()

        units = unit_paths(index)
        self.logger.info("Loaded packages: %s", ", ".join(f"{path} ({name})" for path, name in units.items()))
        for path, name in units.items():
            info = corpus.page_info(path)
            if info is None:
                self.logger.warning("No page data for package %s at %s; skipping", name, path)
                continue
            model.packages.append(self._build_package(model, info))
        return model

    def _build_package(self, model: ModuleDoc, info: PackageInfo) -> PackageDoc:
        package = PackageDoc(
            module=model,
            name=info.name,
            relative_path=info.path,
            absolute_path=model.absolute_path / info.path.lstrip("/"),
            doc=info.doc,
            positions=info.positions,
        )
        extractor = SnippetExtractor(package)

        for type_spec in info.types:
            self._add_type(package, extractor, type_spec)

        for func in info.funcs:
            definition = FunctionDef(
                name=func.name,
                doc=func.doc,
                snippet=extractor.snippet(func.node),
                found_in_file=extractor.found_in_file(func.node),
                signature=func.signature,
            )
            package.functions.append(definition)
            extractor.record(definition)

        structs: Dict[str, StructDef] = {struct.name: struct for struct in package.structs}
        for method in info.methods:
            self._attach_method(structs, extractor, method)

        for value in info.vars:
            self._add_value(package.variables, extractor, value)
        for value in info.consts:
            self._add_value(package.constants, extractor, value)

        self.logger.debug(
            "Package %s: %d structs, %d interfaces, %d functions, %d vars, %d consts",
            info.path,
            len(package.structs),
            len(package.interfaces),
            len(package.functions),
            len(package.variables),
            len(package.constants),
        )
        return package

    def _add_type(self, package: PackageDoc, extractor: SnippetExtractor, spec: TypeSpec) -> None:
        shape = spec.underlying.kind
        if shape == "struct_type":
            struct = StructDef(
                name=spec.name,
                doc=spec.doc,
                snippet=extractor.snippet(spec.underlying, "type ", spec.name, " "),
                found_in_file=extractor.found_in_file(spec.node),
                fields=[FieldSummary(names=f.names, type_text=f.type_text, tag=f.tag) for f in spec.fields],
            )
            package.structs.append(struct)
            extractor.record(struct)
        elif shape == "interface_type":
            interface = InterfaceDef(
                name=spec.name,
                doc=spec.doc,
                snippet=extractor.snippet(spec.underlying, "type ", spec.name, " "),
                found_in_file=extractor.found_in_file(spec.node),
                methods=[MethodSummary(name=m.name, signature=m.signature) for m in spec.methods],
                embeds=list(spec.embeds),
            )
            package.interfaces.append(interface)
            extractor.record(interface)
        else:
            self.logger.debug("Ignoring type %s.%s with underlying %s", package.name, spec.name, shape)

    def _attach_method(
        self, structs: Dict[str, StructDef], extractor: SnippetExtractor, method: FuncSpec
    ) -> None:
        owner = structs.get(method.receiver or "")
        if owner is None:
            self.logger.debug("Dropping method %s.%s: receiver is not a documented struct", method.receiver, method.name)
            return
        definition = MethodDef(
            name=method.name,
            doc=method.doc,
            snippet=extractor.snippet(method.node),
            found_in_file=extractor.found_in_file(method.node),
            signature=method.signature,
            receiver=owner.name,
            pointer_receiver=method.pointer_receiver,
        )
        owner.methods.append(definition)
        extractor.record(definition)

    def _add_value(self, target: list, extractor: SnippetExtractor, value: ValueSpec) -> None:
        definition = ValueDef(
            name=value.names[0],
            doc=value.doc,
            snippet=extractor.snippet(value.node, value.kind, " "),
            found_in_file=extractor.found_in_file(value.node),
            kind=value.kind,
            names=value.names,
        )
        target.append(definition)
        extractor.record(definition)


__all__ = ["DocumentModelBuilder"]
