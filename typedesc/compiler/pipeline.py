"""Generation pipeline: collect descriptors, then describe or emit."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from typedesc.backend.manifest_format import manifest_path_for, write_manifest
from typedesc.compiler.config import GenerateConfig
from typedesc.formatting import CaseDescriptor, FieldEntry, TypeKind, detail, render_value, summary
from typedesc.internals.report import Reporter
from typedesc.semantics.ast import Program
from typedesc.semantics.passes.collect import DescribedType, DescriptorCollector, DescriptorTable


@dataclass
class GenerateOptions:
    out: Optional[Path] = None
    describe: bool = False
    manifest: bool = True


def collect_descriptors(ast: Program, reporter: Reporter, attribute: str) -> DescriptorTable:
    table = DescriptorTable()
    DescriptorCollector(reporter, table, attribute=attribute).collect(ast)
    return table


def default_field_snapshot(described: DescribedType) -> Optional[List[FieldEntry]]:
    """Snapshot of a default-constructed instance, or None if any field lacks a default."""
    stored = described.decl.stored_fields
    if any(fd.default is None for fd in stored):
        return None
    return [FieldEntry(fd.name, render_value(fd.default.value)) for fd in stored]


def describe_lines(table: DescriptorTable) -> List[str]:
    """Summary and sample details for every described type."""
    lines: List[str] = []
    for described in table:
        lines.append(summary(described.descriptor))
        if described.kind is TypeKind.ENUM:
            for case in described.decl.cases:
                if not case.values:
                    lines.append(detail(described.descriptor, CaseDescriptor(case.name)))
        else:
            snapshot = default_field_snapshot(described)
            if snapshot is not None:
                lines.append(detail(described.descriptor, snapshot))
    return lines


def output_paths(src_path: Path, options: GenerateOptions, config: GenerateConfig,
                 base_dir: Path) -> tuple[Path, Path]:
    """(module path, manifest path) for a source file."""
    if options.out is not None:
        module_path = options.out if options.out.is_absolute() else base_dir / options.out
    elif config.output_dir:
        out_dir = Path(config.output_dir)
        if not out_dir.is_absolute():
            out_dir = base_dir / out_dir
        module_path = out_dir / f"{src_path.stem}.py"
    else:
        module_path = src_path.with_suffix(".py")
    return module_path, manifest_path_for(module_path)


def compile_file(ast: Program, src_path: Path, reporter: Reporter, options: GenerateOptions,
                 config: GenerateConfig, base_dir: Path) -> int:
    """Run collection and emit outputs.

    Nothing is written when collection reports errors.

    Returns:
        0 clean, 1 with warnings, 2 on errors.
    """
    from typedesc.backend.codegen_python import generate_module

    table = collect_descriptors(ast, reporter, config.attribute)
    if reporter.has_errors:
        return reporter.exit_code()

    if options.describe:
        for line in describe_lines(table):
            print(line)
        return reporter.exit_code()

    module_path, manifest_path = output_paths(src_path, options, config, base_dir)
    module_path.parent.mkdir(parents=True, exist_ok=True)
    module_path.write_text(generate_module(table, source_name=src_path.name), encoding="utf-8")
    print(f"Wrote {module_path}")

    if options.manifest and config.manifest:
        write_manifest(manifest_path, table, module=module_path.stem, source=src_path.name)
        print(f"Wrote {manifest_path}")

    return reporter.exit_code()
