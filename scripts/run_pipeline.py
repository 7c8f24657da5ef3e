#!/usr/bin/env python3
"""
scripts/run_pipeline.py — End-to-end pipeline CLI.

Runs the SlideGen pipeline: prompt → generate slide text → parse → .pptx

Usage:
    export ANTHROPIC_API_KEY=sk-ant-...
    python scripts/run_pipeline.py "Create a presentation about digital marketing trends"

    # Parse a saved reply without calling the API
    python scripts/run_pipeline.py --from-file reply.txt

Options:
    --output-dir DIR       Where to write output files (default: ./output)
    --model MODEL          Anthropic model name
    --from-file PATH       Parse a saved reply instead of generating one
    --print-text           Print the slide text as well as the summary
    --no-render            Parse only, do not write a .pptx
    --verbose              Show debug logging
"""

import argparse
import logging
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def _print_summary(result, print_text: bool) -> None:
    print(f"\n{'─' * 50}")
    print("Pipeline complete")
    print(f"{'─' * 50}")
    print(f"Slides generated : {result.slide_count}")

    if result.deck is not None:
        for i, slide in enumerate(result.deck.slides, start=1):
            subtype = f"/{slide.data_subtype.value}" if slide.data_subtype else ""
            print(f"  {i:>2}. [{slide.style.value}{subtype}] {slide.title} ({len(slide.content)} points)")

    if print_text and result.text:
        print(f"\nSlide text:\n{result.text}")

    if result.errors:
        print(f"\nErrors ({len(result.errors)}):")
        for err in result.errors:
            print(f"  ✗ {err}")


def main():
    ap = argparse.ArgumentParser(
        description="Run the SlideGen generation pipeline.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    ap.add_argument("prompt", nargs="?", help="What the presentation should cover")
    ap.add_argument("--output-dir", default="./output", help="Output directory (default: ./output)")
    ap.add_argument("--model", default="claude-sonnet-4-6", help="Anthropic model name")
    ap.add_argument("--from-file", default=None, help="Parse a saved reply instead of generating")
    ap.add_argument("--print-text", action="store_true", help="Print the slide text")
    ap.add_argument("--no-render", action="store_true", help="Do not write a .pptx")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.prompt and not args.from_file:
        ap.error("either a prompt or --from-file is required")

    from slidegen.renderer.pptx_renderer import render
    from slidegen.services.orchestrator import Orchestrator, PipelineConfig, PipelineResult
    from slidegen.slidetext.parser import NoContentError, SlideTextParser

    if args.from_file:
        text = Path(args.from_file).read_text(encoding="utf-8")
        try:
            deck = SlideTextParser().parse(text)
        except NoContentError as e:
            print(f"ERROR: {e}")
            sys.exit(1)
        result = PipelineResult(text=text, deck=deck, slide_count=len(deck.slides))
        if not args.no_render:
            result.output_path = render(deck, Path(args.output_dir))
    else:
        api_key = os.environ.get("ANTHROPIC_API_KEY")
        if not api_key:
            print("ERROR: ANTHROPIC_API_KEY environment variable is not set.")
            print("       export ANTHROPIC_API_KEY=sk-ant-...")
            sys.exit(1)

        config = PipelineConfig(
            model=args.model,
            api_key=api_key,
            output_dir=args.output_dir,
            render_pptx=not args.no_render,
        )

        print("\nSlideGen Pipeline")
        print(f"{'─' * 50}")
        print(f"Prompt   : {args.prompt}")
        print(f"Model    : {args.model}")
        print(f"Output   : {args.output_dir}")
        print(f"{'─' * 50}\n")

        print("Running pipeline...")
        result = Orchestrator(config).generate(args.prompt)

    _print_summary(result, args.print_text)

    if result.output_path:
        print(f"\nOutput: {result.output_path}")
    elif result.deck is None:
        print("\nNo slides produced (check errors above).")
        sys.exit(1)


if __name__ == "__main__":
    main()
