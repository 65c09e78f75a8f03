from src.attendance_ledger.attendance_ledger.attendance.factory import ClassificationStrategyFactory
from src.attendance_ledger.attendance_ledger.attendance.strategies.extra_strategy import ExtraTimeStrategy
from src.attendance_ledger.attendance_ledger.attendance.strategies.low_strategy import LowTimeStrategy
from src.attendance_ledger.attendance_ledger.attendance.strategies.normal_strategy import NormalTimeStrategy


def test_factory_picks_low_below_minimum():
    factory = ClassificationStrategyFactory()
    assert isinstance(factory.for_worked_seconds(29699), LowTimeStrategy)


def test_factory_picks_normal_on_both_boundaries():
    factory = ClassificationStrategyFactory()
    assert isinstance(factory.for_worked_seconds(29700), NormalTimeStrategy)
    assert isinstance(factory.for_worked_seconds(30600), NormalTimeStrategy)


def test_factory_picks_extra_above_maximum():
    factory = ClassificationStrategyFactory()
    assert isinstance(factory.for_worked_seconds(30601), ExtraTimeStrategy)


def test_factory_thresholds_are_configurable():
    factory = ClassificationStrategyFactory(min_normal=3600, max_normal=7200)
    assert isinstance(factory.for_worked_seconds(3600), NormalTimeStrategy)
    assert isinstance(factory.for_worked_seconds(7201), ExtraTimeStrategy)
