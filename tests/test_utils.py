from app.utils import DEFAULT_USER_KEY, map_user_key, unique_ids


def test_map_user_key_reads_hex_prefix():
    assert map_user_key("0000000a-1111-2222-3333-444444444444") == 11
    assert map_user_key("ffffffff-aaaa") == 96


def test_map_user_key_is_stable_and_bounded():
    user_id = "3f2504e0-4f89-11d3-9a0c-0305e82c3301"
    keys = {map_user_key(user_id) for _ in range(5)}
    assert len(keys) == 1
    assert 1 <= keys.pop() <= 200


def test_map_user_key_falls_back_for_unparseable_ids():
    assert map_user_key("") == DEFAULT_USER_KEY
    assert map_user_key("abc") == DEFAULT_USER_KEY
    assert map_user_key("user-1234567") == DEFAULT_USER_KEY
    assert map_user_key("0x123456") == DEFAULT_USER_KEY


def test_map_user_key_respects_custom_space():
    assert map_user_key("000000ff", key_space=10) == 255 % 10 + 1
    assert map_user_key("00ff", key_space=10, prefix_length=4) == 6


def test_unique_ids_keeps_first_occurrence():
    assert unique_ids(["s2", None, "s1", "", "s2", " s3 "], exclude=["s1"]) == [
        "s2",
        "s3",
    ]


def test_map_user_key_fallback_log_omits_the_identifier(caplog):
    with caplog.at_level("INFO"):
        assert map_user_key("someone@example.com") == DEFAULT_USER_KEY
    assert "someone@example.com" not in caplog.text
    assert "default recommendation key 1" in caplog.text
