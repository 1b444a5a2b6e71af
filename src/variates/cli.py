"""
Command-line interface for variates.

Provides commands for:
- Drawing samples from a single distribution
- Producing rows from a YAML profile
- Listing profiles and supported distributions
"""

import argparse
import logging
import sys
from typing import Any

import yaml
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import ConsoleMetricExporter, PeriodicExportingMetricReader

from .config import load_settings
from .diagnostics import RejectionMetrics
from .exporters.console_exporter import ConsoleSampleExporter
from .exporters.file_exporter import ExportResult, FileSampleExporter
from .profiles.profile_loader import ProfileLoader
from .sources.uniform_source import RandomSource
from .statistics.batch import sample_array, summarize
from .statistics.factory import DistributionFactory

logger = logging.getLogger(__name__)

# Long enough that metrics are only exported on shutdown
_METRIC_EXPORT_INTERVAL_MS = 60_000


def _parse_params(pairs: list[str] | None) -> dict[str, Any]:
    """Turn ["mean=0", "stdev=2.5"] into {"mean": 0, "stdev": 2.5}."""
    params: dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, raw = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Parameter must look like name=value, got {pair!r}")
        params[key.strip()] = yaml.safe_load(raw)
    return params


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="variates",
        description="Pseudo-random variate generators for synthetic numeric data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Ten standard normal draws
  variates sample --distribution normal --count 10

  # Reproducible binomial draws with a summary
  variates sample --distribution binomial --param trials=40 --param probability=0.2 \\
      --count 1000 --seed 7 --summary

  # Rows from a YAML profile, written to a file
  variates profile --name checkout_latency --output-file rows.jsonl
        """,
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: from config.yaml or VARIATES_LOG_LEVEL)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    sample_parser = subparsers.add_parser("sample", help="Draw samples from one distribution")
    sample_parser.add_argument(
        "--distribution",
        type=str,
        required=True,
        help="Distribution name (see `variates distributions`)",
    )
    sample_parser.add_argument(
        "--param",
        action="append",
        default=None,
        metavar="NAME=VALUE",
        help="Distribution parameter; repeat for several (e.g. --param mean=0 --param stdev=1)",
    )
    sample_parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Number of samples (default: default_count from config.yaml)",
    )
    sample_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for a private source (default: process-wide default source)",
    )
    sample_parser.add_argument(
        "--normalize",
        type=float,
        nargs=2,
        default=None,
        metavar=("MEAN", "STDEV"),
        help="Rescale draws with the distribution's normalize() mapping",
    )
    sample_parser.add_argument(
        "--output-file",
        type=str,
        default=None,
        help="Write samples as JSON lines to this file instead of stdout",
    )
    sample_parser.add_argument(
        "--summary",
        action="store_true",
        help="Print count, mean, variance and range of the draws",
    )
    sample_parser.add_argument(
        "--metrics",
        action="store_true",
        help="Export draw and rejection counts as OpenTelemetry metrics to stderr",
    )

    profile_parser = subparsers.add_parser("profile", help="Generate rows from a YAML profile")
    profile_parser.add_argument(
        "--name",
        type=str,
        required=True,
        help="Profile name (without .yaml extension)",
    )
    profile_parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Override row count from the profile",
    )
    profile_parser.add_argument(
        "--profiles-dir",
        type=str,
        default=None,
        help="Folder with profile YAML files (default: bundled profiles)",
    )
    profile_parser.add_argument(
        "--output-file",
        type=str,
        default=None,
        help="Write rows as JSON lines to this file instead of stdout",
    )

    list_parser = subparsers.add_parser("list", help="List available profiles")
    list_parser.add_argument(
        "--profiles-dir",
        type=str,
        default=None,
        help="Folder with profile YAML files (default: bundled profiles)",
    )

    subparsers.add_parser("distributions", help="List supported distribution names")

    return parser


def _exporter(output_file: str | None):
    if output_file:
        return FileSampleExporter(output_file, append=False)
    return ConsoleSampleExporter()


def cmd_sample(args: argparse.Namespace):
    """Draw samples from one distribution."""
    settings = load_settings()
    count = settings.default_count if args.count is None else args.count

    try:
        config = _parse_params(args.param)
        config["distribution"] = args.distribution
        source = RandomSource(args.seed) if args.seed is not None else None
        sampler = DistributionFactory.create(config, source=source)
        logger.debug("Sampling %d values from %r", count, sampler)

        if args.normalize:
            mean, stdev = args.normalize
            values = sampler.fill_normalized([0.0] * count, mean, stdev)
        else:
            values = sample_array(sampler, count)

        if _exporter(args.output_file).export(values) is ExportResult.FAILURE:
            print(f"\nError: could not write {args.output_file}")
            sys.exit(1)

        if args.summary:
            stats = summarize(values)
            print(f"Distribution: {sampler!r}")
            print(f"   Count: {stats.count}")
            print(f"   Mean: {stats.mean:.6g} (expected {sampler.mean:.6g})")
            print(f"   Variance: {stats.variance:.6g} (expected {sampler.variance:.6g})")
            print(f"   Range: [{stats.minimum:.6g}, {stats.maximum:.6g}]")
            print(f"   Rejections: {sampler.rejection_count}")

        if args.metrics:
            _export_metrics(sampler, count)

    except KeyboardInterrupt:
        print("\nGeneration interrupted")
        sys.exit(0)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


def _export_metrics(sampler, count: int) -> None:
    reader = PeriodicExportingMetricReader(
        ConsoleMetricExporter(out=sys.stderr),
        export_interval_millis=_METRIC_EXPORT_INTERVAL_MS,
    )
    provider = MeterProvider(metric_readers=[reader])
    RejectionMetrics(provider.get_meter(__name__)).record(sampler, count)
    provider.shutdown()


def cmd_profile(args: argparse.Namespace):
    """Generate rows from a YAML profile."""
    loader = ProfileLoader(args.profiles_dir)

    try:
        profile = loader.load(args.name)
    except FileNotFoundError:
        available = loader.list_profiles()
        print(f"Profile not found: {args.name}")
        print(f"   Available profiles: {', '.join(available)}")
        sys.exit(1)

    try:
        rows = list(profile.records(args.count))
        if _exporter(args.output_file).export(rows) is ExportResult.FAILURE:
            print(f"\nError: could not write {args.output_file}")
            sys.exit(1)
        if args.output_file:
            print(f"Generated {len(rows)} rows for profile {profile.name}")
            print(f"   Output: {args.output_file}")
    except KeyboardInterrupt:
        print("\nGeneration interrupted")
        sys.exit(0)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


def cmd_list(args: argparse.Namespace):
    """List available profiles."""
    loader = ProfileLoader(args.profiles_dir)
    profiles = loader.load_all()

    if not profiles:
        print("No profiles found.")
        print(f"Looking in: {loader.profiles_dir}")
        return

    print("Available profiles:")
    print()

    for profile in profiles:
        print(f"  - {profile.name}")
        if profile.description:
            print(f"     {profile.description}")
        print(f"     Fields: {', '.join(profile.fields)}")
        seed = "random" if profile.seed is None else profile.seed
        print(f"     Count: {profile.count}, Seed: {seed}")
        print()


def cmd_distributions(args: argparse.Namespace):
    """List supported distribution names."""
    for name in DistributionFactory.available():
        print(name)


def main(argv: list[str] | None = None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    level = args.log_level or load_settings().log_level
    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING))

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "sample":
        cmd_sample(args)
    elif args.command == "profile":
        cmd_profile(args)
    elif args.command == "list":
        cmd_list(args)
    elif args.command == "distributions":
        cmd_distributions(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
