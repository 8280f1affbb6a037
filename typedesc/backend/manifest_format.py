"""Descriptor manifest (<stem>.descriptors.json) written next to generated modules.

The manifest lets a host register the generated descriptors without
importing the generated module. It is a plain JSON document:

    {
      "typedesc_manifest_version": 1,
      "module": "models",
      "source": "models.decl",
      "compiler_version": "0.1.0",
      "generated_at": "2026-01-01T00:00:00+00:00",
      "types": [
        {"name": "Person", "kind": "struct", "inherits": [],
         "fields": [{"name": "age", "type": "Int", "static": false, "constant": true}],
         "cases": []}
      ]
    }
"""
from __future__ import annotations

import datetime
import json
from pathlib import Path
from typing import List, Optional

from typedesc import __version__
from typedesc.formatting import TypeDescriptor, TypeKind
from typedesc.internals.exceptions import ManifestError
from typedesc.semantics.passes.collect import DescribedType, DescriptorTable

MANIFEST_SUFFIX = ".descriptors.json"
MANIFEST_VERSION = 1
VERSION_KEY = "typedesc_manifest_version"


def manifest_path_for(module_path: Path) -> Path:
    """models.py -> models.descriptors.json"""
    return module_path.with_name(f"{module_path.stem}{MANIFEST_SUFFIX}")


def _type_entry(described: DescribedType) -> dict:
    decl = described.decl
    return {
        "name": described.name,
        "kind": described.kind.value,
        "inherits": [str(t) for t in decl.inherits],
        "fields": [
            {"name": fd.name, "type": str(fd.ty), "static": fd.is_static, "constant": fd.is_constant}
            for fd in decl.fields
        ],
        "cases": [
            {
                "name": case.name,
                "values": [{"label": v.label, "type": str(v.ty)} for v in case.values],
            }
            for case in decl.cases
        ],
    }


def build_manifest(table: DescriptorTable, module: str, source: Optional[str] = None) -> dict:
    return {
        VERSION_KEY: MANIFEST_VERSION,
        "module": module,
        "source": source or "",
        "compiler_version": __version__,
        "generated_at": datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="seconds"),
        "types": [_type_entry(t) for t in table],
    }


def write_manifest(output_path: Path, table: DescriptorTable, module: str,
                   source: Optional[str] = None) -> None:
    manifest = build_manifest(table, module, source)
    output_path.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")


def _is_named(item: object, *keys: str) -> bool:
    return isinstance(item, dict) and all(isinstance(item.get(k), str) for k in keys)


def _check_types(types: object, path: str) -> None:
    if not isinstance(types, list):
        raise ManifestError("CE3004", path=path, reason="missing 'types' list")
    kinds = {k.value for k in TypeKind}
    for index, entry in enumerate(types):
        if not _is_named(entry, "name"):
            raise ManifestError("CE3004", path=path, reason=f"type #{index} has no name")
        name = entry["name"]
        if entry.get("kind") not in kinds:
            raise ManifestError("CE3004", path=path,
                                reason=f"type '{name}' has unsupported kind {entry.get('kind')!r}")
        fields = entry.get("fields", [])
        if not isinstance(fields, list) or not all(_is_named(fd, "name", "type") for fd in fields):
            raise ManifestError("CE3004", path=path, reason=f"type '{name}' has a malformed field")
        cases = entry.get("cases", [])
        if not isinstance(cases, list):
            raise ManifestError("CE3004", path=path, reason=f"type '{name}' has a malformed case")
        for case in cases:
            values = case.get("values", []) if isinstance(case, dict) else None
            if not _is_named(case, "name") or not isinstance(values, list) or not all(
                _is_named(v, "type") and "label" in v for v in values
            ):
                raise ManifestError("CE3004", path=path, reason=f"type '{name}' has a malformed case")


def read_manifest(manifest_path: Path) -> dict:
    """Read and validate a descriptor manifest.

    Raises:
        ManifestError: CE3001-CE3004 for format errors.
        OSError: the file cannot be read.
    """
    path = str(manifest_path)
    try:
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ManifestError("CE3003", path=path, reason=str(e)) from None

    if not isinstance(manifest, dict) or VERSION_KEY not in manifest:
        raise ManifestError("CE3001", path=path)
    if manifest[VERSION_KEY] != MANIFEST_VERSION:
        raise ManifestError("CE3002", path=path,
                            version=manifest[VERSION_KEY], supported=MANIFEST_VERSION)
    _check_types(manifest.get("types"), path)
    return manifest


def read_descriptors(manifest_path: Path) -> List[TypeDescriptor]:
    """TypeDescriptors listed in a manifest, in declaration order."""
    manifest = read_manifest(manifest_path)
    return [TypeDescriptor(name=t["name"], kind=t["kind"]) for t in manifest["types"]]
