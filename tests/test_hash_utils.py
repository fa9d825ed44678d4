from feedsmith.utils.hash_utils import calculate_hash, content_urn


def test_calculate_hash_ignores_key_order() -> None:
    assert calculate_hash({"title": "a", "pubdate": "b"}) == calculate_hash({"pubdate": "b", "title": "a"})


def test_calculate_hash_detects_content_changes() -> None:
    assert calculate_hash({"title": "Original"}) != calculate_hash({"title": "Updated"})


def test_calculate_hash_handles_unicode() -> None:
    digest = calculate_hash({"title": "żółw 🐢"})

    assert len(digest) == 64
    assert digest == calculate_hash({"title": "żółw 🐢"})


def test_content_urn_prefix() -> None:
    urn = content_urn({"title": "a"})

    assert urn == f"urn:sha256:{calculate_hash({'title': 'a'})}"
