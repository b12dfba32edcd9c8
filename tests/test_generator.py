import pytest

from policypass.errors import EntropySourceError, InvalidConfiguration
from policypass.generator import (
    DEFAULT_GROUPS,
    LengthSpec,
    PasswordBuilder,
    PasswordConfig,
    generate_password,
    generate_passwords,
    make_config,
)


def test_one_char_from_each_group(scripted):
    # (key, index) per group
    source = scripted([5, 1, 3, 0, 9, 1])
    config = PasswordConfig(length=LengthSpec.fixed(3), groups=["ab", "CD", "12"])
    assert PasswordBuilder(source).build(config) == "Cb2"
    assert source.calls == 6


def test_colliding_slot_key_is_redrawn(scripted):
    source = scripted([7, 0, 7, 4, 0, 9, 0])
    config = PasswordConfig(length=LengthSpec.fixed(3), groups=["ab", "CD", "12"])
    assert PasswordBuilder(source).build(config) == "Ca1"
    assert source.values == []


def test_first_char_takes_slot_zero(scripted):
    # first-char index, then a drawn key of 0 collides with the reserved slot
    source = scripted([2, 0, 10, 1])
    config = PasswordConfig(length=LengthSpec.fixed(2), groups=["abc"], first_char_group="XYZ")
    assert PasswordBuilder(source).build(config) == "Zb"


def test_fill_uses_all_groups(scripted):
    source = scripted([10, 0, 20, 0, 5, 3])
    config = PasswordConfig(length=LengthSpec.fixed(3), groups=["ab", "CD"])
    assert PasswordBuilder(source).build(config) == "DaC"


def test_groups_after_full_length_are_skipped(scripted):
    source = scripted([1, 0, 2, 0])
    config = PasswordConfig(length=LengthSpec.fixed(2), groups=["ab", "CD", "12"])
    assert PasswordBuilder(source).build(config) == "aC"


def test_first_char_alone_fills_length_one(scripted):
    source = scripted([0])
    config = PasswordConfig(length=LengthSpec.fixed(1), groups=["abc"], first_char_group="X")
    assert PasswordBuilder(source).build(config) == "X"


def test_range_length_uses_one_draw(scripted):
    builder = PasswordBuilder(scripted([4]))
    assert builder.resolve_length(LengthSpec.range(5, 7)) == 6


def test_equal_bounds_skip_length_draw(counting_source):
    config = PasswordConfig(length=LengthSpec.range(5, 5), groups=["a"])
    pw = PasswordBuilder(counting_source).build(config)
    assert pw == "aaaaa"
    # one key and one index per character, nothing for the length
    assert counting_source.calls == 10


def test_length_fixed_and_range():
    for pw in generate_passwords(make_config(length=17, count=50)):
        assert len(pw) == 17
    for pw in generate_passwords(make_config(min_length=4, max_length=9, count=200)):
        assert 4 <= len(pw) <= 9


def test_default_config_covers_every_group():
    passwords = generate_passwords(PasswordConfig(count=200))
    for pw in passwords:
        assert 8 <= len(pw) <= 12
        for group in DEFAULT_GROUPS:
            assert any(c in group for c in pw)


def test_example_three_groups_length_three():
    config = make_config(length=3, groups=["ab", "CD", "12"], count=100)
    for pw in generate_passwords(config):
        assert len(pw) == 3
        assert sum(c in "ab" for c in pw) == 1
        assert sum(c in "CD" for c in pw) == 1
        assert sum(c in "12" for c in pw) == 1


def test_first_char_group_does_not_count_toward_coverage():
    config = make_config(length=3, groups=["abc", "123"], first_char_group="XYZ", count=200)
    for pw in generate_passwords(config):
        assert pw[0] in "XYZ"
        assert sum(c in "abc" for c in pw[1:]) == 1
        assert sum(c in "123" for c in pw[1:]) == 1


def test_first_char_only_at_position_zero():
    config = make_config(length=12, groups=["abc"], first_char_group="XYZ", count=100)
    for pw in generate_passwords(config):
        assert pw[0] in "XYZ"
        assert all(c in "abc" for c in pw[1:])


def test_alphabet_containment():
    groups = ["ab", "CD", "!?"]
    config = make_config(min_length=3, max_length=20, groups=groups, count=200)
    allowed = set("".join(groups))
    for pw in generate_passwords(config):
        assert set(pw) <= allowed


def test_single_symbol_distribution():
    config = make_config(length=1, groups=["ab"], count=10000)
    passwords = generate_passwords(config)
    counts = {"a": passwords.count("a"), "b": passwords.count("b")}
    assert sum(counts.values()) == 10000
    expected = 5000
    chi2 = sum((n - expected) ** 2 / expected for n in counts.values())
    # 1 degree of freedom; 15.1 is roughly p = 0.0001
    assert chi2 < 15.1


def test_independent_calls_differ():
    config = make_config(length=32)
    assert generate_password(config) != generate_password(config)
    batch = generate_passwords(make_config(length=32, count=20))
    assert len(set(batch)) == 20


def test_count_controls_batch_size(counting_source):
    config = make_config(length=2, groups=["a"], count=4)
    assert generate_passwords(config, source=counting_source) == ["aa"] * 4


def test_generate_password_ignores_count():
    assert isinstance(generate_password(make_config(length=6, count=5)), str)


def test_entropy_failure_propagates(broken_source):
    with pytest.raises(EntropySourceError):
        generate_passwords(make_config(length=8, count=3), source=broken_source)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"length": 0},
        {"length": -3},
        {"min_length": 0, "max_length": 4},
        {"min_length": 9, "max_length": 4},
        {"groups": []},
        {"groups": ["abc", ""]},
        {"groups": "abc"},
        {"groups": ["abc", 5]},
        {"first_char_group": ""},
        {"count": 0},
        {"length": True},
    ],
)
def test_invalid_configuration_rejected(kwargs):
    with pytest.raises(InvalidConfiguration):
        make_config(**kwargs)


def test_invalid_configuration_is_value_error():
    try:
        PasswordConfig(length=LengthSpec.fixed(4), groups=("",))
        raised = False
    except ValueError:
        raised = True
    assert raised


def test_config_is_immutable():
    config = make_config(length=5)
    with pytest.raises(AttributeError):
        config.count = 3
    assert config.groups == DEFAULT_GROUPS
