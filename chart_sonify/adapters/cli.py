"""
CLI Adapter - Command-line interface.

Thin wrapper over load_chart + Sonifier.
"""

from __future__ import annotations

import argparse
import itertools
import sys
import time
from typing import Optional

from chart_sonify.errors import SonificationError
from chart_sonify.monitoring.logging import LogLevel, StructuredLogger, configure_logging


def main(args: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="chart-sonify",
        description="Explore charts through pitch, pan and speech",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=[level.value for level in LogLevel],
        help="Minimum log level (default: warning)",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # describe command
    describe_parser = subparsers.add_parser("describe", help="Print the summary and every point")
    describe_parser.add_argument("file", help="Chart JSON file")

    # render command
    render_parser = subparsers.add_parser("render", help="Render a group's autoplay to WAV")
    render_parser.add_argument("file", help="Chart JSON file")
    render_parser.add_argument("-o", "--output", required=True, help="Output WAV filename")
    render_parser.add_argument("-g", "--group", type=int, default=0, help="Group index (default: 0)")
    render_parser.add_argument("-s", "--speed", type=int, help="Milliseconds between points")
    render_parser.add_argument(
        "--sample-rate",
        type=int,
        default=24000,
        help="Sample rate (default: 24000)",
    )

    # navigate command
    navigate_parser = subparsers.add_parser(
        "navigate",
        help="Replay key presses and print what would be heard",
    )
    navigate_parser.add_argument("file", help="Chart JSON file")
    navigate_parser.add_argument(
        "keys",
        nargs="*",
        help="Keys such as ArrowRight, Shift+ArrowLeft, PageDown, Space, q, e",
    )
    navigate_parser.add_argument("-o", "--output", help="Also write the tones to a WAV file")

    # version command
    subparsers.add_parser("version", help="Show version")

    parsed = parser.parse_args(args)

    if parsed.command is None:
        parser.print_help()
        return 0

    if parsed.command == "version":
        from chart_sonify import __version__
        print(f"chart-sonify {__version__}")
        return 0

    log = configure_logging(parsed.log_level, json_format=parsed.json_logs)
    commands = {
        "describe": _cmd_describe,
        "render": _cmd_render,
        "navigate": _cmd_navigate,
    }
    try:
        return commands[parsed.command](parsed, log)
    except (SonificationError, OSError) as e:
        log.sonification_error(e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _load(path: str, log: StructuredLogger, synth_options: Optional[dict] = None, **kwargs):
    """Load a chart; with synth_options the tone renderer is a ToneSynthesizer
    playing the chart's own pitch table."""
    from chart_sonify.audio.synth import SynthConfig, ToneSynthesizer
    from chart_sonify.config import load_chart
    from chart_sonify.engine import Sonifier

    document = load_chart(path)
    if synth_options is not None:
        options = dict(synth_options)
        clock = options.pop("clock", time.monotonic)
        max_notes = options.pop("max_notes", 1000)
        config = SynthConfig(pitch_table=document.config.pitch_table, **options)
        kwargs["tone_renderer"] = ToneSynthesizer(config, clock=clock, max_notes=max_notes)
    engine = Sonifier(document.data, config=document.config, **kwargs)
    log.chart_loaded(
        path,
        groups=len(engine.metadata),
        points=sum(meta.size for meta in engine.metadata),
    )
    return engine


def _cmd_describe(args: argparse.Namespace, log: StructuredLogger) -> int:
    """Print the focus summary followed by every point description."""
    from chart_sonify.announcer import StreamAnnouncer

    engine = _load(args.file, log, announcer=StreamAnnouncer())
    with engine:
        engine.focus()
        for label, descriptions in engine.describe_all():
            print()
            if label:
                print(f"{label}:")
            for description in descriptions:
                print(f"  {description}")
    return 0


def _cmd_render(args: argparse.Namespace, log: StructuredLogger) -> int:
    """Render one group as an autoplay pass and write it to WAV."""
    import soundfile as sf

    engine = _load(args.file, log, synth_options={"sample_rate": args.sample_rate})
    synth = engine.tone_renderer
    with engine:
        if not 0 <= args.group < len(engine.metadata):
            print(
                f"Error: group {args.group} out of range (0-{len(engine.metadata) - 1})",
                file=sys.stderr,
            )
            return 1
        pcm = engine.render_group(args.group, synthesizer=synth, speed=args.speed)

    sf.write(args.output, pcm, synth.sample_rate)
    log.group_rendered(args.group, samples=len(pcm), sample_rate=synth.sample_rate)
    print(f"Audio saved to: {args.output}")
    print(f"Duration: {len(pcm) / synth.sample_rate:.2f}s")
    return 0


def _cmd_navigate(args: argparse.Namespace, log: StructuredLogger) -> int:
    """Replay key presses on virtual time, printing tones and announcements."""
    from chart_sonify.announcer import StreamAnnouncer
    from chart_sonify.navigation.commands import command_for_key, parse_key
    from chart_sonify.testing.scheduler import ManualScheduler

    scheduler = ManualScheduler()
    engine = _load(
        args.file,
        log,
        synth_options={"clock": lambda: scheduler.now, "max_notes": None},
        announcer=StreamAnnouncer(prefix="  "),
        scheduler=scheduler,
    )
    synth = engine.tone_renderer

    with engine:
        engine.focus()
        for key_spec in args.keys:
            key, shift, ctrl = parse_key(key_spec)
            command = command_for_key(key, shift=shift, ctrl=ctrl)
            if command is None:
                log.warning("unbound_key", f"No command bound to {key_spec!r}", key=key_spec)
                continue
            print(f"[{key_spec}]")
            played = len(synth.notes)
            accepted = engine.handle(command)
            log.command_handled(command.value, accepted=accepted, **_position(engine))
            played = _print_notes(synth, played)
            # autoplay ticks and the description
            scheduler.run_all()
            _print_notes(synth, played)

    if args.output:
        import soundfile as sf

        pcm = synth.mixdown()
        sf.write(args.output, pcm, synth.sample_rate)
        print(f"Audio saved to: {args.output}")
    return 0


def _print_notes(synth, start: int) -> int:
    for note in itertools.islice(synth.notes, start, None):
        print(f"  tone bin={note.bin_index} ({note.frequency:.1f} Hz) pan={note.pan:+.2f}")
    return len(synth.notes)


def _position(engine) -> dict[str, int]:
    cursor = engine.cursor
    return {"group": cursor.group_index, "point": cursor.point_index}


if __name__ == "__main__":
    sys.exit(main())
