import mock
import pytest

from wrgl.pipeline import config_utils


def test_load_config_expands_paths(write_file):
    config_file = write_file("wrgl.yaml", ["log_dir: $WRGL_TEST_LOGS/wrgl",
                                          "algorithm:",
                                          "  panels_depth: 50",
                                          "resources:",
                                          "  tmp:",
                                          "    dir: ~/tmp"])
    with mock.patch.dict("os.environ", {"WRGL_TEST_LOGS": "/logs", "HOME": "/home/wrgl"}):
        config = config_utils.load_config(config_file)
    assert config["log_dir"] == "/logs/wrgl"
    assert config["algorithm"]["panels_depth"] == 50
    assert config["resources"]["tmp"]["dir"] == "/home/wrgl/tmp"


def test_load_config_empty_file(write_file):
    assert config_utils.load_config(write_file("empty.yaml", [])) == {"algorithm": {}}


@pytest.mark.parametrize('config_file', [None, '/nonexistent/wrgl.yaml'])
def test_load_config_missing(config_file):
    with pytest.raises(ValueError):
        config_utils.load_config(config_file)


def test_expand_path_leaves_non_strings():
    assert config_utils.expand_path(30) == 30
