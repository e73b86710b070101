"""pytest fixtures shared by the wxchart tests."""

import pytest

from service.wxchart.testhelpers import write_sample_csvs


@pytest.fixture
def data_dir(tmp_path):
    """A directory containing all sample CSV sources."""
    return write_sample_csvs(tmp_path)
