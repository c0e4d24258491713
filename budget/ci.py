"""budget.ci

Detect which job of a parallel CI build is running.

Measuring is slow, and the result is the same on every parallel job, so only
the first job does the work. Outside CI the job number is always 1.
"""

from __future__ import annotations

from typing import Mapping


def ci_job_number(env: Mapping[str, str]) -> int:
    """1-based job index of the current CI job."""
    travis = env.get("TRAVIS_JOB_NUMBER")
    if travis and "." in travis:
        suffix = travis.rsplit(".", 1)[1]
        if suffix.isdigit():
            return int(suffix)

    # Zero-based indexes.
    for key in ("CIRCLE_NODE_INDEX", "BUILDKITE_PARALLEL_JOB"):
        value = env.get(key)
        if value and value.isdigit():
            return int(value) + 1

    gitlab = env.get("CI_NODE_INDEX")
    if gitlab and gitlab.isdigit():
        return int(gitlab)

    return 1
