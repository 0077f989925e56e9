import argparse
import json
import sys
from pathlib import Path

from policy_compass.auth.identity import Identity
from policy_compass.config.settings import Settings
from policy_compass.errors import PolicyCompassError, describe_error
from policy_compass.extraction.models import ExtractionProgress, SourceDocument
from policy_compass.logging.logger import Log
from policy_compass.processor.pipeline import PipelineContext
from policy_compass.processor.processor import build_processor


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="policy-compass",
        description="Analyze a policy PDF and optionally open Jira tickets for its action items",
    )
    p.add_argument("document", type=Path, help="Path to the policy PDF")
    p.add_argument("--variant", default=None, help="Rubric variant (strict, baseline)")
    p.add_argument("--dispatch", action="store_true", help="Create a Jira ticket per action item")
    p.add_argument("--user-id", default=None, help="Override IDENTITY_USER_ID")
    p.add_argument("--token", default=None, help="Override IDENTITY_TOKEN")
    p.add_argument("--log-level", default=None, help="Override LOG_LEVEL (INFO, DEBUG, ...)")
    return p


def _print_progress(progress: ExtractionProgress) -> None:
    eta = f", ~{progress.eta_seconds:.1f}s left" if progress.eta_seconds else ""
    Log.info(f"Extracted page {progress.pages_done}/{progress.total_pages} ({progress.percent}%{eta})")


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> pipeline -> JSON report on stdout."""
    args = build_parser().parse_args(argv)
    try:
        settings = Settings()
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1
    Log.configure(args.log_level or settings.log_level)

    identity = Identity(
        user_id=args.user_id or settings.identity_user_id,
        token=args.token or settings.identity_token,
    )
    try:
        document = SourceDocument.from_path(args.document)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    try:
        processor = build_processor(settings, on_progress=_print_progress)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1
    except PolicyCompassError as exc:
        print(f"{describe_error(exc)} ({exc.code}: {exc})", file=sys.stderr)
        return 1

    try:
        context = processor.process(
            PipelineContext(
                identity=identity,
                document=document,
                variant=args.variant,
                dispatch_tickets=args.dispatch,
            )
        )
    except PolicyCompassError as exc:
        print(f"{describe_error(exc)} ({exc.code}: {exc})", file=sys.stderr)
        return 1
    finally:
        processor.close()

    report: dict[str, object] = {
        "analysis": context.analysis.to_dict() if context.analysis else None,
    }
    if context.extracted is not None:
        meta = context.extracted.metadata
        report["document"] = {
            "title": meta.title,
            "author": meta.author,
            "pageCount": meta.page_count,
            "sizeBytes": meta.size_bytes,
            "wordCount": context.extracted.word_count,
        }
    if context.dispatch_report is not None:
        report["dispatch"] = context.dispatch_report.to_dict()
    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
