import pytest
from logcask import KeyDir, KeyEntry

@pytest.mark.parametrize("key, value", [
    ("a", KeyEntry(offset=0, length=22, key="a")),
    (2, KeyEntry(offset=22, length=36, key=2)),
    (3.5, KeyEntry(offset=58, length=36, key=3.5)),
])
def test_key_set_and_get(key, value):
    keydir = KeyDir()
    keydir[key] = value
    assert keydir[key] == value

def test_last_entry_wins():
    keydir = KeyDir()
    keydir["a"] = KeyEntry(offset=0, length=22, key="a")
    keydir["a"] = KeyEntry(offset=22, length=23, key="a")
    assert len(keydir) == 1
    assert keydir["a"].offset == 22

def test_missing_key():
    keydir = KeyDir()
    assert keydir.get("a") is None
    with pytest.raises(KeyError):
        keydir["a"]

def test_keys_are_typed():
    keydir = KeyDir()
    keydir[1] = KeyEntry(offset=0, length=36, key=1)
    keydir[1.0] = KeyEntry(offset=36, length=36, key=1.0)
    assert len(keydir) == 2
    assert keydir[1].key == 1
    assert keydir[1.0].offset == 36
    assert 1 in keydir and 1.0 in keydir and "1" not in keydir

def test_nan_key():
    keydir = KeyDir()
    keydir[float("nan")] = KeyEntry(offset=0, length=36, key=float("nan"))
    assert keydir.get(float("nan")).offset == 0

def test_constructor_normalises_keys():
    keydir = KeyDir({"a": KeyEntry(offset=0, length=22, key="a")})
    assert keydir["a"].offset == 0
    assert "a" in keydir
