"""Command-line interface for BOM generation."""

from __future__ import annotations

import argparse
import logging
import pathlib
from typing import List

from bombuilder.core import attacher, bom_model, config, module_graph, writer
from bombuilder.core.errors import BomBuilderError

_LOG = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a dependency-management BOM from a module graph")
    parser.add_argument("--graph", type=pathlib.Path, required=True, help="Module graph snapshot (YAML or JSON)")
    parser.add_argument("--config", type=pathlib.Path, default=pathlib.Path("bom.yml"), help="BOM configuration YAML file")
    parser.add_argument("--output-dir", type=pathlib.Path, default=pathlib.Path("target"), help="Build output directory the BOM file name is resolved against")
    parser.add_argument("--out", type=pathlib.Path, help="Explicit path for the generated BOM (overrides --output-dir and the configured name)")
    parser.add_argument("--classifier", help="Attach the BOM under this classifier")
    parser.add_argument("--parent", help="Parent of the generated BOM as groupId:artifactId:version")
    parser.add_argument("--attach", action=argparse.BooleanOptionalAction, default=None, help="Attach the generated BOM to the current module (--no-attach overrides the configuration)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING", help="Logging verbosity")
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        graph = module_graph.load_graph(args.graph)
        settings = config.load_config(args.config).with_overrides(
            classifier=args.classifier,
            parent=args.parent,
            attach=args.attach,
        )
        plan = attacher.plan_attachment(settings.attach, settings.classifier, graph.current)
        manifest = bom_model.generate(graph, settings)
        output_file = args.out or args.output_dir / settings.output
        writer.write_model(manifest, output_file)
    except BomBuilderError as exc:
        _LOG.error("%s", exc)
        return 2

    print(f"Generated BOM {manifest.group_id}:{manifest.artifact_id}:{manifest.version} at {output_file}")
    if plan is not None:
        attachment = attacher.Attacher().attach(plan, manifest, output_file)
        if attachment.replaces_document:
            print(f"Replaced POM of {attachment.module_key}")
        else:
            print(f"Attached to {attachment.module_key} with classifier {attachment.classifier}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
