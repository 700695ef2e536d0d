"""Synthetic module bundles for tests."""
from __future__ import annotations

import threading
from typing import Dict, Iterator, List, Tuple

from cuevendor.core.vendors.bundle import BundleEntry, InMemoryBundle


def sample_bundle_files() -> Tuple[Dict[str, str], List[str]]:
    """Return ``(files, executables)`` for a two-module bundle.

    Includes a ``cue.mod/pkg`` subtree that extraction must skip and one
    executable script.
    """
    files = {
        "dagger.io/cue.mod/module.cue": 'module: "dagger.io"\n',
        "dagger.io/dagger/plan.cue": "package dagger\n\n#Plan: {actions: {...}}\n",
        "dagger.io/dagger/core/exec.cue": "package core\n\n#Exec: {args: [...string]}\n",
        "universe.dagger.io/cue.mod/module.cue": 'module: "universe.dagger.io"\n',
        "universe.dagger.io/cue.mod/pkg/dagger.io/dagger/plan.cue": "package dagger\n",
        "universe.dagger.io/bash/bash.cue": "package bash\n\n#Run: {script: string}\n",
        "universe.dagger.io/bats/bats.sh": "#!/usr/bin/env bash\nexec bats \"$@\"\n",
    }
    return files, ["universe.dagger.io/bats/bats.sh"]


class BlockingBundle:
    """Bundle that parks the extracting thread until released.

    ``entered`` is set once extraction starts (the caller then holds the
    project lock); extraction continues after ``release`` is set.
    """

    def __init__(self, inner: InMemoryBundle, *, timeout: float = 10.0) -> None:
        self.inner = inner
        self.entered = threading.Event()
        self.release = threading.Event()
        self.timeout = timeout

    def iter_entries(self) -> Iterator[BundleEntry]:
        self.entered.set()
        self.release.wait(self.timeout)
        return self.inner.iter_entries()

    def read_bytes(self, path: str) -> bytes:
        return self.inner.read_bytes(path)


class FailingBundle:
    """Bundle whose file reads fail."""

    def __init__(self, inner: InMemoryBundle) -> None:
        self.inner = inner

    def iter_entries(self) -> Iterator[BundleEntry]:
        return self.inner.iter_entries()

    def read_bytes(self, path: str) -> bytes:
        raise PermissionError(f"cannot read {path}")
