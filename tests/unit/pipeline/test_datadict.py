import pytest

from wrgl.pipeline import datadict as dd


def test_get_panels_depth():
    config = {
        'algorithm': {
            'panels_depth': 50,
        },
    }

    result = dd.get_panels_depth(config)
    assert result == 50


def test_defaults():
    assert dd.get_panels_depth({}) == 30
    assert dd.get_genotyping_qual({}) == 30
    assert dd.get_genotyping_depth({}) == 1000
    assert dd.get_log_dir({}) == 'log'
    assert dd.get_interpretations({}) is None


def test_set_genotyping_depth():
    config = dd.set_genotyping_depth({'algorithm': {'panels_depth': 50}}, 500)
    assert config == {'algorithm': {'panels_depth': 50, 'genotyping_depth': 500}}


def test_get_keys():
    assert dd.get_keys('genotyping_qual') == ['algorithm', 'genotyping_qual']


@pytest.mark.parametrize('value', [-1, 'deep'])
def test_invalid_threshold(value):
    with pytest.raises(ValueError):
        dd.get_panels_depth({'algorithm': {'panels_depth': value}})


def test_get_thresholds():
    config = {'algorithm': {'genotyping_qual': '20.5', 'panels_depth': '40'}}
    assert dd.get_thresholds(config) == {'panels_depth': 40,
                                         'genotyping_qual': 20.5,
                                         'genotyping_depth': 1000}
