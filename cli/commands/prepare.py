from __future__ import annotations

from analysis_prep.domain.project import ClassificationStatus
from pipeline.models import PrepOutcome
from pipeline.pipeline import AnalysisPrepPipeline


def _print_outcome(outcome: PrepOutcome) -> None:
    counts = outcome.result.status_counts()
    print("\n📋 Projects")
    for status in ClassificationStatus:
        print(f"  {status.value:<18}: {counts.get(status, 0)}")
    shared = outcome.result.shared_files
    if shared:
        print(f"  Shared files      : {len(shared)}")

    if outcome.config is not None:
        print("\n🧩 Analysis config")
        print(f"  Path      : {outcome.result.config_file_path}")
        print(f"  Analyzers : {outcome.config.analyzers_count}")
        for a in outcome.config.analyzers_settings:
            print(f"    - {a.language}/{a.plugin}: {a.ruleset_path}")


def run_prepare_mode(args, pipeline: AnalysisPrepPipeline) -> int:
    project_key = (args.project_key or "").strip()
    if not project_key:
        raise SystemExit("Missing --project-key.")

    settings = pipeline.settings
    print("\n🚀 Preparing analysis")
    print(f"  Project key : {project_key}")
    print(f"  Working dir : {settings.paths.working_dir}")
    print(f"  Languages   : {', '.join(settings.languages)}")
    if pipeline.sonar is not None:
        print(f"  Server      : {pipeline.sonar.host}")

    try:
        outcome = pipeline.prepare(
            project_key,
            project_name=args.project_name,
            project_version=args.project_version,
            organization=args.organization,
            properties=list(args.properties or []),
            settings_file=args.settings_file,
        )
    except (ValueError, FileNotFoundError) as e:
        raise SystemExit(f"Invalid input: {e}") from e

    _print_outcome(outcome)

    if outcome.completed:
        print("\n✅ Pre-processing completed.")
        return 0
    print(f"\n⚠️ Pre-processing failed ({outcome.state}): {outcome.error}")
    return 1
