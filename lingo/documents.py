"""JSON documents for shapes and original/translation instances."""

from __future__ import annotations

import json
import logging
import pathlib
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import DocumentError, OverwriteRefusedError
from .numbers import LanguageRegistry
from .schema import (
    Accessor,
    ChildShape,
    EntryKind,
    EntryShape,
    GroupShape,
    LANGUAGE_FIELD,
    default_accessor,
)
from .structures import TrString, TrStringNumbers

logger = logging.getLogger(__name__)

LANGUAGE_KEY = LANGUAGE_FIELD
TRANSLATION_SUFFIX = ".json"


def shape_from_dict(data: Mapping[str, Any]) -> GroupShape:
    """Build a :class:`GroupShape` from its JSON representation."""

    if not isinstance(data, Mapping) or not isinstance(data.get("name"), str):
        raise DocumentError("Shape documents need a mapping with a string 'name'.")
    entries: List[EntryShape] = []
    for raw in data.get("entries", []):
        try:
            kind = EntryKind(raw.get("kind", EntryKind.PLAIN.value))
        except ValueError as exc:
            raise DocumentError(f"Unknown entry kind in group '{data['name']}': {exc}") from exc
        if not isinstance(raw.get("field"), str):
            raise DocumentError(f"Entry in group '{data['name']}' has no 'field'.")
        entries.append(EntryShape(field=raw["field"], kind=kind, notes=raw.get("notes", "")))
    groups: List[ChildShape] = []
    for raw in data.get("groups", []):
        if not isinstance(raw.get("field"), str) or "shape" not in raw:
            raise DocumentError(
                f"Child group in '{data['name']}' needs a 'field' and a 'shape'."
            )
        groups.append(ChildShape(field=raw["field"], shape=shape_from_dict(raw["shape"])))
    try:
        return GroupShape(
            name=data["name"],
            label=data.get("label", ""),
            description=data.get("description", ""),
            entries=entries,
            groups=groups,
        )
    except ValueError as exc:
        raise DocumentError(str(exc)) from exc


def shape_to_dict(shape: GroupShape) -> Dict[str, Any]:
    return {
        "name": shape.name,
        "label": shape.label,
        "description": shape.description,
        "entries": [
            {"field": entry.field, "kind": entry.kind.value, "notes": entry.notes}
            for entry in shape.entries
        ],
        "groups": [
            {"field": child.field, "shape": shape_to_dict(child.shape)}
            for child in shape.groups
        ],
    }


def _decode_plain(raw: Any, where: str) -> TrString:
    if isinstance(raw, str):
        return TrString(translation=raw)
    if not isinstance(raw, Mapping):
        raise DocumentError(f"{where}: expected a string or an object.")
    old = raw.get("old_original")
    if old is not None and not isinstance(old, str):
        raise DocumentError(f"{where}: 'old_original' must be a string.")
    return TrString(translation=str(raw.get("translation") or ""), old_original=old)


def _decode_plural(raw: Any, where: str) -> TrStringNumbers:
    if not isinstance(raw, Mapping) or not isinstance(raw.get("is_numeric"), list):
        raise DocumentError(f"{where}: plural strings need an 'is_numeric' list.")
    translations = raw.get("translations") or []
    old = raw.get("old_original")
    if not isinstance(translations, list) or (old is not None and not isinstance(old, list)):
        raise DocumentError(f"{where}: plural forms must be lists of strings.")
    return TrStringNumbers(
        is_numeric=tuple(raw["is_numeric"]),
        translations=[str(form) for form in translations],
        old_original=None if old is None else [str(form) for form in old],
    )


def _decode_group(shape: GroupShape, data: Mapping[str, Any], path: str) -> Dict[str, Any]:
    instance: Dict[str, Any] = {}
    prefix = f"{path}." if path else ""
    for entry in shape.entries:
        if entry.field not in data:
            continue
        where = prefix + entry.field
        if entry.kind is EntryKind.PLAIN:
            instance[entry.field] = _decode_plain(data[entry.field], where)
        else:
            instance[entry.field] = _decode_plural(data[entry.field], where)
    for child in shape.groups:
        raw = data.get(child.field)
        if raw is None:
            continue
        if not isinstance(raw, Mapping):
            raise DocumentError(f"{prefix + child.field}: expected an object.")
        instance[child.field] = _decode_group(child.shape, raw, prefix + child.field)
    return instance


def decode_instance(shape: GroupShape, data: Mapping[str, Any]) -> Dict[str, Any]:
    """Turn a parsed JSON document into an instance of ``shape``.

    Fields the document does not mention are left out; building a content
    tree from such an instance reports them as structural mismatches.
    """

    if not isinstance(data, Mapping):
        raise DocumentError("Instance documents must be JSON objects.")
    instance = _decode_group(shape, data, "")
    if isinstance(data.get(LANGUAGE_KEY), str):
        instance[LANGUAGE_KEY] = data[LANGUAGE_KEY]
    return instance


def encode_instance(
    shape: GroupShape,
    instance: Any,
    accessor: Accessor = default_accessor,
) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    try:
        language = accessor(instance, LANGUAGE_KEY)
    except (KeyError, AttributeError):
        language = None
    if language:
        data[LANGUAGE_KEY] = language
    data.update(_encode_group(shape, instance, accessor))
    return data


def _encode_group(shape: GroupShape, instance: Any, accessor: Accessor) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for entry in shape.entries:
        try:
            value = accessor(instance, entry.field)
        except (KeyError, AttributeError):
            continue
        if isinstance(value, TrString):
            data[entry.field] = {
                "translation": value.translation,
                "old_original": value.old_original,
            }
        elif isinstance(value, TrStringNumbers):
            data[entry.field] = {
                "is_numeric": list(value.is_numeric),
                "translations": list(value.translations),
                "old_original": None if value.old_original is None else list(value.old_original),
            }
    for child in shape.groups:
        try:
            value = accessor(instance, child.field)
        except (KeyError, AttributeError):
            continue
        if value is not None:
            data[child.field] = _encode_group(child.shape, value, accessor)
    return data


def _read_json(path: pathlib.Path) -> Any:
    try:
        return json.loads(path.read_text("utf-8"))
    except FileNotFoundError:
        raise
    except OSError as exc:
        raise DocumentError(f"Could not read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DocumentError(f"{path} is not valid JSON: {exc}") from exc


def load_shape(path: pathlib.Path) -> GroupShape:
    logger.debug("Loading shape from %s", path)
    return shape_from_dict(_read_json(pathlib.Path(path)))


def load_instance(shape: GroupShape, path: pathlib.Path) -> Dict[str, Any]:
    logger.debug("Loading instance from %s", path)
    return decode_instance(shape, _read_json(pathlib.Path(path)))


def save_instance(
    shape: GroupShape,
    instance: Any,
    path: pathlib.Path,
    *,
    force: bool = True,
    accessor: Accessor = default_accessor,
) -> None:
    path = pathlib.Path(path)
    if path.exists() and not force:
        raise OverwriteRefusedError(
            f"{path} already exists. Rename it or use the overwrite flag."
        )
    data = encode_instance(shape, instance, accessor)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", "utf-8")
    logger.debug("Saved instance to %s", path)


def _blank_group(shape: GroupShape, original: Any, accessor: Accessor) -> Dict[str, Any]:
    instance: Dict[str, Any] = {}
    for entry in shape.entries:
        if entry.kind is EntryKind.PLAIN:
            instance[entry.field] = TrString()
            continue
        try:
            source = accessor(original, entry.field)
        except (KeyError, AttributeError):
            source = None
        pattern = source.is_numeric if isinstance(source, TrStringNumbers) else ()
        instance[entry.field] = TrStringNumbers(is_numeric=pattern)
    for child in shape.groups:
        try:
            child_original = accessor(original, child.field)
        except (KeyError, AttributeError):
            child_original = {}
        instance[child.field] = _blank_group(child.shape, child_original, accessor)
    return instance


def blank_translation(
    shape: GroupShape,
    original: Any,
    language: str,
    accessor: Accessor = default_accessor,
) -> Dict[str, Any]:
    """Create an empty translation instance conforming to ``shape``.

    Plural patterns are copied from ``original``; no entry has a snapshot, so
    every entry starts out stale.
    """

    instance = _blank_group(shape, original, accessor)
    instance[LANGUAGE_KEY] = language
    return instance


def translation_path(directory: pathlib.Path, module: str, language: str) -> pathlib.Path:
    return pathlib.Path(directory) / f"{module}.{language}{TRANSLATION_SUFFIX}"


def try_load_translation(
    shape: GroupShape,
    directory: pathlib.Path,
    module: str,
    language: Optional[str],
) -> Optional[Dict[str, Any]]:
    """Load ``<directory>/<module>.<language>.json`` if it exists.

    Returns None when no language is given or the file is absent; broken
    files still raise :class:`DocumentError`.
    """

    if not language:
        return None
    path = translation_path(directory, module, language)
    if not path.is_file():
        return None
    return load_instance(shape, path)


def available_translations(
    directory: pathlib.Path,
    module: str,
    registry: LanguageRegistry,
) -> List[Tuple[str, pathlib.Path]]:
    """List ``(language, path)`` for each translation file of ``module``.

    Files for languages the registry does not know are skipped. The result
    is ordered by the languages' native names.
    """

    directory = pathlib.Path(directory)
    if not directory.is_dir():
        return []
    found: List[Tuple[str, pathlib.Path]] = []
    prefix = f"{module}."
    for path in directory.glob(f"{module}.*{TRANSLATION_SUFFIX}"):
        language = path.name[len(prefix) : -len(TRANSLATION_SUFFIX)]
        if not language or language not in registry:
            logger.debug("Skipping %s: unknown language '%s'", path, language)
            continue
        found.append((language, path))
    found.sort(key=lambda item: registry.get(item[0]).native_name)
    return found
