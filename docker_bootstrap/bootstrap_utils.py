#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

import contextlib
import os
import re
import subprocess
import sys

from collections.abc import Iterable
from datetime import datetime
from tempfile import NamedTemporaryFile


###################################################################################################
# print to stderr
def eprint(*args, **kwargs):
    filteredArgs = (
        {k: v for (k, v) in kwargs.items() if k not in ("timestamp", "flush")} if isinstance(kwargs, dict) else {}
    )
    if "timestamp" in kwargs and kwargs["timestamp"]:
        print(
            datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            *args,
            file=sys.stderr,
            **filteredArgs,
        )
    else:
        print(*args, file=sys.stderr, **filteredArgs)
    if "flush" in kwargs and kwargs["flush"]:
        sys.stderr.flush()


###################################################################################################
# flatten a collection, but don't split strings
def flatten(coll):
    for i in coll:
        if isinstance(i, Iterable) and not isinstance(i, str):
            for subc in flatten(i):
                yield subc
        else:
            yield i


###################################################################################################
# if the object is an iterable, return it, otherwise return a tuple with it as a single element.
# useful if you want to user either a scalar or an array in a loop, etc.
def get_iterable(x):
    if isinstance(x, Iterable) and not isinstance(x, str):
        return x
    else:
        return (x,)


###################################################################################################
# convenient boolean argument parsing
def str2bool(v):
    if isinstance(v, bool):
        return v
    elif isinstance(v, str):
        if v.lower() in ("yes", "true", "t", "y", "1"):
            return True
        elif v.lower() in ("no", "false", "f", "n", "0", ""):
            return False
        else:
            raise ValueError("Boolean value expected")
    elif not v:
        return False
    else:
        raise ValueError("Boolean value expected")


###################################################################################################
# a context manager returning a temporary filename which is deleted upon leaving the context
@contextlib.contextmanager
def temporary_filename(suffix=None):
    try:
        f = NamedTemporaryFile(suffix=suffix, delete=False)
        tmp_name = f.name
        f.close()
        yield tmp_name
    finally:
        os.unlink(tmp_name)


###################################################################################################
# read the contents of a text file, or None if it doesn't exist or can't be read
def file_contents(filename, encoding="utf-8"):
    if os.path.isfile(filename):
        try:
            with open(filename, "r", encoding=encoding, errors="ignore") as f:
                return f.read()
        except OSError:
            return None
    else:
        return None


###################################################################################################
# determine if a program/script exists and is executable in the system path
def which(cmd, debug=False):
    result = any(
        os.access(os.path.join(path, cmd), os.X_OK) for path in os.environ.get("PATH", "").split(os.pathsep) if path
    )
    if debug:
        eprint(f"which {cmd} returned {result}")
    return result


###################################################################################################
# run command with arguments and return its exit code and output
def run_process(
    command,
    stdout=True,
    stderr=True,
    stdin=None,
    env=None,
    debug=False,
):
    retcode = -1
    output = []
    flat_command = list(flatten(get_iterable(command)))

    try:
        process = subprocess.run(
            flat_command,
            input=stdin if stdin else None,
            capture_output=True,
            check=False,
            text=True,
            errors="ignore",
            env=env,
        )
        retcode = process.returncode
        if stdout and process.stdout:
            output.extend(process.stdout.splitlines())
        if stderr and process.stderr:
            output.extend(process.stderr.splitlines())

    except (FileNotFoundError, OSError):
        retcode = 127
        if stderr:
            output.append(f"Command {' '.join(flat_command)} not found or unable to execute")

    if debug:
        eprint(f"{flat_command} returned {retcode}: {output}")

    return retcode, output


###################################################################################################
# version string helpers

_VERSION_SUFFIX_REGEX = re.compile(r"[^0-9.].*$")


def strip_version_suffix(version):
    """Drop everything from the first character that is neither a digit nor a dot.

    "24.0.7+dfsg1" -> "24.0.7", "27.1.1-1~ubuntu" -> "27.1.1", "v24" -> "".
    """
    return _VERSION_SUFFIX_REGEX.sub("", (version or "").strip())


def version_sort_key(version):
    """Natural ordering key for a dotted numeric version (as with `sort -V`)."""
    return tuple(int(segment) for segment in strip_version_suffix(version).split(".") if segment)


def version_ge(a, b, debug=False):
    """Return True if version a >= version b.

    Both values are stripped of any trailing non-numeric suffix first. When
    dpkg is available its version comparison is authoritative for a "yes";
    otherwise (or when dpkg says no or can't parse the input) the larger of
    the two under natural version sort must be a.
    """
    stripped_a = strip_version_suffix(a)
    stripped_b = strip_version_suffix(b)

    if which("dpkg"):
        err, _ = run_process(
            ["dpkg", "--compare-versions", stripped_a, "ge", stripped_b],
            stdout=False,
            stderr=False,
            debug=debug,
        )
        if err == 0:
            return True

    return sorted((stripped_b, stripped_a), key=version_sort_key)[-1] == stripped_a
