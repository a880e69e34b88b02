from types import SimpleNamespace

from skilltree.effects.conditions import always, critical_health, health_below, xp_at_least

def test_health_below():
    check = health_below(0.5)
    assert check(SimpleNamespace(health_percent=0.49))
    assert not check(SimpleNamespace(health_percent=0.5))

def test_critical_health_is_inclusive():
    check = critical_health()
    assert check(SimpleNamespace(health_percent=0.25))
    assert not check(SimpleNamespace(health_percent=0.26))

def test_xp_at_least():
    check = xp_at_least(100)
    assert check(SimpleNamespace(xp=100))
    assert not check(SimpleNamespace(xp=99))

def test_always():
    assert always()(None)
