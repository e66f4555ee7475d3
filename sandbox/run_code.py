#!/usr/bin/env python3
"""Run a submitted solution against one test input.

Usage: python run_code.py <code_file> [<input_file>]

The test input is JSON, read from <input_file> or stdin. The last line of
stdout is a JSON object: {"ok": true, "output": ...} or {"ok": false, "error": ...}.
Anything the solution prints is captured and discarded.
"""
import contextlib
import inspect
import io
import json
import sys
import traceback


def find_entry(scope, code_file):
    fn = scope.get("solve")
    if callable(fn):
        return fn

    solution = scope.get("Solution")
    if inspect.isclass(solution):
        instance = solution()
        for name in vars(solution):
            if name.startswith("_"):
                continue
            attr = getattr(instance, name)
            if callable(attr) and not inspect.isclass(attr):
                return attr

    defined = [
        v for v in scope.values()
        if inspect.isfunction(v) and v.__code__.co_filename == code_file
    ]
    return defined[-1] if defined else None


def call_entry(fn, test_input):
    if isinstance(test_input, dict):
        try:
            params = inspect.signature(fn).parameters
        except (TypeError, ValueError):
            params = {}
        if test_input and all(key in params for key in test_input):
            return fn(**test_input)
    return fn(test_input)


def main(argv):
    if len(argv) < 2:
        print("Usage: python run_code.py <code_file> [<input_file>]")
        return 2

    code_file = argv[1]
    with open(code_file, "r", encoding="utf-8-sig") as f:
        code = f.read()
    if len(argv) > 2:
        with open(argv[2], "r", encoding="utf-8") as f:
            test_input = json.load(f)
    else:
        test_input = json.loads(sys.stdin.read() or "null")

    captured = io.StringIO()
    try:
        with contextlib.redirect_stdout(captured):
            scope = {"__name__": "__solution__", "__builtins__": __builtins__}
            exec(compile(code, code_file, "exec"), scope)
            fn = find_entry(scope, code_file)
            if fn is None:
                raise NameError("No function found to call")
            output = call_entry(fn, test_input)
        payload = json.dumps({"ok": True, "output": output})
    except Exception as e:
        tb = traceback.format_exception_only(type(e), e)
        payload = json.dumps({"ok": False, "error": "".join(tb).strip()})

    sys.stdout.write("\n" + payload + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
