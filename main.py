from __future__ import annotations

import argparse
from dataclasses import replace
import json
import logging
from pathlib import Path

from wireframe_core.core import JsonlAuditSink, WireframeConfig, WireframeOrchestrator, load_config
from wireframe_core.platform import InMemorySurfaceRegistry
from wireframe_core.targets import PngStorageSink, safe_name
from wireframe_core.ui.tree_loader import load_tree


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="wireframe")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a JSON element tree to a PNG wireframe.")
    render.add_argument("tree", type=Path)
    render.add_argument("--out", type=Path, required=True, help="Storage root; PNGs land in <out>/images/.")
    render.add_argument("--name", default="wireframe")
    render.add_argument("--config", type=Path, default=None, help="TOML file with a [wireframe] table.")
    render.add_argument("--compositing", choices=["composite", "per_surface"], default=None)
    render.add_argument("--audit-jsonl", type=Path, default=None)

    report = sub.add_parser("audit-report", help="Print render audit summary from a JSONL sink.")
    report.add_argument("--audit-jsonl", type=Path, required=True)

    prune = sub.add_parser("audit-prune", help="Prune old audit rows to max row count.")
    prune.add_argument("--audit-jsonl", type=Path, required=True)
    prune.add_argument("--max-rows", type=int, required=True)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        config = load_config(args.config) if args.config is not None else WireframeConfig()
        if args.compositing is not None:
            config = replace(config, compositing=args.compositing)
        tree = load_tree(args.tree)
        audit_sink = JsonlAuditSink(args.audit_jsonl) if args.audit_jsonl is not None else None
        storage = PngStorageSink(args.out)
        orchestrator = WireframeOrchestrator(
            InMemorySurfaceRegistry(tree.surfaces),
            config=config,
            storage=storage,
            audit_logger=audit_sink.log if audit_sink is not None else None,
        )
        result = orchestrator.capture(tree.context, args.name)
        if not result.ok:
            assert result.failure is not None
            raise SystemExit(f"render failed: {result.failure.kind.value}: {result.failure.message}")
        for overlay in result.overlays:
            storage.save(overlay.raster, f"{args.name}-{safe_name(overlay.surface_id)}")
        print(
            f"render complete: path={storage.path_for(args.name)} saved={result.saved} "
            f"nodes_drawn={result.report.nodes_drawn} node_errors={len(result.report.node_errors)} "
            f"overlays={len(result.overlays)} duration_ms={result.duration_ms:.2f}"
        )
        return

    if args.command == "audit-report":
        print(json.dumps(JsonlAuditSink(args.audit_jsonl).summarize(), indent=2, sort_keys=True))
        return

    if args.command == "audit-prune":
        deleted = JsonlAuditSink(args.audit_jsonl).prune(max_rows=args.max_rows)
        print(f"pruned rows={deleted}")
        return

    raise RuntimeError(f"unsupported command: {args.command}")


if __name__ == "__main__":
    main()
