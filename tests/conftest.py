import shutil

import pytest


@pytest.fixture
def requires_go():
    # Integration tests drive the real Go toolchain.
    if shutil.which("go") is None:
        pytest.skip("go toolchain not available")
