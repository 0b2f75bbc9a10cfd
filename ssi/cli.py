from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ssi_core.config import AppConfig
from ssi_core.reporting import LogManager
from ssi_core.subtitles import SubtitleDocument, apply_section_script

API_HELP = """\
Section Interpreter

Runs Python code on every section of the selected lines. A section is the
part of a line that shares the same properties. This line:

    Never gonna {\\fs200}give {\\alpha&H55&}you up

has three sections: "Never gonna " with default properties, "give " with
font size 200, and "you up" with font size 200 and alpha &H55&.

Functions:

  modify(tag, method)     Change a tag with a method, e.g. modify("fs", multiply(2))
  modify_line(prop, method)
                          Same, on a line property (layer, start_time, end_time,
                          style, actor, margin_l, margin_r, margin_t, margin_b,
                          effect, comment), e.g. modify_line("layer", add(1))
  add(...)                modify("clip", add(-10, -10, 10, 10)). No subtract:
                          add a negative number.
  multiply(...)           modify("fscx", multiply(0.5)). No divide.
  replace(x)              modify("fn", replace("Comic Sans MS"))
  append(x)               modify_line("actor", append(" the great"))
  get(tag)                Current value of a tag; several parameters come
                          back as a tuple: x1, y1, x2, y2 = get("clip")
  remove(...)             remove("bord", "shad")
  insert(tag)             insert("\\\\blur2")
  select()                Add the line to the returned selection
  duplicate()             Insert a copy of the line, as it was before the
                          script touched it, right after it. The copy is
                          visited next, so guard it:

                              if i % 2 == 1:
                                  duplicate()
                                  # code for the original line
                              else:
                                  pass  # code for the copy

  log(...) / print(...)   Write to the log

select(), duplicate() and modify_line() run once per line, after every
section has run and before the line is saved.

Variables:

  i       Position in the selection, counting from 1
  li      Document index of the line
  j       Section number, counting from 1
  state   Every tag's current value for this section, e.g. state["fs"]
  pos     Line position (pos.x, pos.y)
  org     Rotation origin (org.x, org.y)
  tag     Override block of this section, braces included
  text    Text of this section
  math    The math module
"""


def parse_lines(spec: str, count: int) -> list[int]:
    """'0,3,5-9' -> [0, 3, 5, 6, 7, 8, 9]."""
    indices: list[int] = []
    for part in spec.split(','):
        part = part.strip()
        if not part:
            continue
        if '-' in part:
            first, last = part.split('-', 1)
            indices.extend(range(int(first), int(last) + 1))
        else:
            indices.append(int(part))
    for index in indices:
        if index < 0 or index >= count:
            raise ValueError(f"line {index} out of range (document has {count} lines)")
    return indices


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="ssi", description="Run Python code on every section of subtitle lines")
    p.add_argument("--input", type=Path)
    p.add_argument("--output", type=Path)
    code = p.add_mutually_exclusive_group()
    code.add_argument("--code", help="Script source")
    code.add_argument("--code-file", type=Path, help="File holding the script source")
    p.add_argument("--lines", help="Event indices, e.g. 0,3,5-9 (default: all)")
    p.add_argument("--style", help="Only lines using this style")
    p.add_argument("--settings", type=Path, help="Settings JSON file")
    p.add_argument("--api-help", action="store_true", help="Print the script API and exit")
    args = p.parse_args(argv)

    if args.api_help:
        print(API_HELP)
        return 0
    if args.input is None or args.output is None:
        p.error("--input and --output are required")

    config = AppConfig(settings_path=args.settings) if args.settings else AppConfig()

    if args.code_file is not None:
        script = args.code_file.read_text(encoding='utf-8')
    elif args.code is not None:
        script = args.code
    else:
        script = config.get('last_script', '')
    if not script.strip():
        p.error("no script given (--code or --code-file)")

    config.set('last_script', script)
    config.save()

    logger, handler, log_to_all = LogManager.setup_run_log(
        LogManager.run_name(args.input), Path(config.get('logs_folder')), print
    )
    try:
        document = SubtitleDocument.load(args.input, config.settings, log_callback=log_to_all)

        if args.lines:
            try:
                selection = parse_lines(args.lines, len(document))
            except ValueError as e:
                p.error(f"--lines: {e}")
        else:
            selection = document.all_lines()
        if args.style:
            styled = set(document.lines_with_style(args.style))
            selection = [index for index in selection if index in styled]

        result = apply_section_script(document, selection, script)
        if not result.success:
            log_to_all(f"[Interpreter] {result.error or result.summary}")
            return 1

        document.save(args.output)
        log_to_all(f"[Interpreter] Wrote {args.output}")
        print(",".join(str(index) for index in result.selection))
        return 0
    finally:
        LogManager.cleanup_log(logger, handler)
        if config.get('archive_logs'):
            LogManager.archive_log(handler, Path(config.get('logs_folder')) / 'archive')


if __name__ == "__main__":
    sys.exit(main())
