from sdfatlas.charset import Charset


def test_ascii_has_95_printable_characters():
    ascii_set = Charset.ascii()
    assert len(ascii_set) == 95
    assert ord(" ") in ascii_set
    assert ord("~") in ascii_set
    assert 0x7F not in ascii_set
    assert 0x1F not in ascii_set


def test_ascii_returns_independent_copies():
    first = Charset.ascii()
    first.remove(ord("A"))
    assert ord("A") in Charset.ascii()


def test_iteration_is_sorted():
    cs = Charset([0x263A, 65, 0x20, 1000])
    assert list(cs) == sorted([0x263A, 65, 0x20, 1000])


def test_add_is_idempotent():
    cs = Charset()
    cs.add(66)
    cs.add(66)
    assert len(cs) == 1
    assert 66 in cs


def test_remove_present_and_absent():
    cs = Charset([1, 2, 3])
    cs.remove(2)
    cs.remove(99)
    assert list(cs) == [1, 3]


def test_empty_charset():
    cs = Charset()
    assert len(cs) == 0
    assert not cs
    assert list(cs) == []


def test_equality():
    assert Charset([5, 6]) == Charset([6, 5])
    assert not (Charset([5]) == Charset([6]))