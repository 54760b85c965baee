import pytest

from weatherstats.models import CityResult
from weatherstats.presavers import (
    HighestAverageTemperature,
    LockedPreSaver,
    MostFoggyHours,
    MostSunnyHours,
)
from weatherstats.saver import MemorySaver


def _saver():
    return MemorySaver([HighestAverageTemperature(), MostSunnyHours(), MostFoggyHours()])


def test_results_keyed_by_pre_saver_name():
    saver = _saver()
    saver.save(CityResult(name="a", temp_average=1.0))
    assert set(saver.results()) == {
        "highest_avg_temp",
        "hours_with_full_sun",
        "hours_with_fog",
    }


def test_save_reaches_every_pre_saver():
    saver = _saver()
    saver.save(CityResult(name="a", foggy_hours_count=2, temp_average=3.5, sunny_hours_count=1))
    saver.save(CityResult(name="b", foggy_hours_count=1, temp_average=9.0, sunny_hours_count=6))
    results = saver.results()
    assert results["highest_avg_temp"].city_name == "b"
    assert results["hours_with_full_sun"].city_name == "b"
    assert results["hours_with_fog"].city_name == "a"
    assert results["hours_with_fog"].value == 2


def test_locked_pre_savers_give_same_results():
    plain = _saver()
    locked = MemorySaver(
        [
            LockedPreSaver(HighestAverageTemperature()),
            LockedPreSaver(MostSunnyHours()),
            LockedPreSaver(MostFoggyHours()),
        ]
    )
    for result in (
        CityResult(name="a", foggy_hours_count=4, temp_average=-1.0, sunny_hours_count=8),
        CityResult(name="b", foggy_hours_count=7, temp_average=2.0, sunny_hours_count=3),
    ):
        plain.save(result)
        locked.save(result)
    assert locked.results() == plain.results()


def test_results_without_temperature_raise():
    with pytest.raises(ValueError):
        _saver().results()


def test_empty_saver_has_no_results():
    assert MemorySaver([]).results() == {}