"""
Unit tests for scan sessions: retained text, re-scan against merged lexicons, store lifecycle.
Run from repo root: python -m pytest backend/tests/test_session.py -v
"""
import pytest


def _lexicon(**kw):
    from veganscan.lexicon.lexicon_schema import Lexicon
    return Lexicon.from_dict(kw)


def test_session_retains_last_scan():
    """scan() keeps the raw text and result."""
    from veganscan.session import ScanSession
    from veganscan.models.scan_result import Verdict
    s = ScanSession(session_id="s1", lexicon=_lexicon(blacklist=["gelatine"]))
    res = s.scan("Zutaten: Gelatine")
    assert s.last_text == "Zutaten: Gelatine"
    assert s.last_result is res
    assert res.verdict == Verdict.NOT_VEGAN


def test_session_extensions_rescan_without_ocr():
    """Extensions turn an Unclear scan into NotVegan using the retained text."""
    from veganscan.session import ScanSession
    from veganscan.models.scan_result import Verdict
    base = _lexicon(blacklist=["gelatine"])
    s = ScanSession(session_id="s1", lexicon=base)
    assert s.scan("Zutaten: Karmin, Zucker").verdict == Verdict.UNCLEAR
    res = s.apply_extensions([{"blacklist": ["karmin"]}, {"blacklist": 7}])
    assert res.verdict == Verdict.NOT_VEGAN
    assert res.blacklist_hits == ("karmin",)
    assert s.last_text == "Zutaten: Karmin, Zucker"
    assert s.extension_count == 1
    assert "karmin" not in base.blacklist


def test_session_extensions_without_text():
    """Extensions with nothing scanned yet classify empty text."""
    from veganscan.session import ScanSession
    from veganscan.models.scan_result import Verdict
    s = ScanSession(session_id="s1", lexicon=_lexicon())
    res = s.apply_extensions([{"blacklist": ["honig"]}])
    assert res.verdict == Verdict.VEGAN
    assert "honig" in s.lexicon.blacklist


def test_session_without_lexicon_stays_unclear_after_extensions():
    """No base lexicon -> Unclear; extension fragments alone never make a label Vegan."""
    from veganscan.session import ScanSession
    from veganscan.models.scan_result import Verdict
    s = ScanSession(session_id="s1")
    assert s.scan("Zutaten: Zucker, Salz").verdict == Verdict.UNCLEAR
    res = s.apply_extensions([{"greylist": ["glycerin"]}])
    assert res.verdict == Verdict.UNCLEAR
    assert s.lexicon is None
    assert s.extension_count == 0
    assert s.last_text == "Zutaten: Zucker, Salz"


def test_session_extension_count_ignores_malformed():
    """Only fragments that pass validation are counted."""
    from veganscan.session import ScanSession
    s = ScanSession(session_id="s1", lexicon=_lexicon())
    s.apply_extensions([{"blacklist": 7}, ["honig"], None])
    assert s.extension_count == 0
    s.apply_extensions([{"blacklist": ["honig"]}, {"greylist": "x"}, {"greylist": ["glycerin"]}])
    assert s.extension_count == 2


def test_session_concurrent_extensions_keep_every_merge():
    """Parallel extension calls on one session do not lose merges."""
    from concurrent.futures import ThreadPoolExecutor
    from veganscan.session import ScanSession
    s = ScanSession(session_id="s1", lexicon=_lexicon(blacklist=["gelatine"]))
    s.scan("Zutaten: Zucker")
    words = [f"zutat{i:02d}" for i in range(40)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda w: s.apply_extensions([{"blacklist": [w]}]), words))
    assert set(words) <= s.lexicon.blacklist
    assert "gelatine" in s.lexicon.blacklist
    assert s.extension_count == 40


def test_session_reset():
    """reset() clears retained text and result but keeps the lexicon."""
    from veganscan.session import ScanSession
    lex = _lexicon(blacklist=["gelatine"])
    s = ScanSession(session_id="s1", lexicon=lex)
    s.scan("Gelatine")
    s.reset()
    assert s.last_text is None
    assert s.last_result is None
    assert s.lexicon is lex


def test_session_store_lifecycle():
    """Store creates, finds and discards independent sessions."""
    from veganscan.session import SessionStore
    store = SessionStore(base_lexicon=_lexicon(blacklist=["gelatine"]))
    a = store.create()
    b = store.get_or_create(None)
    assert a.session_id != b.session_id
    assert store.get(a.session_id) is a
    assert store.get_or_create(a.session_id) is a
    assert store.get("missing") is None
    assert len(store) == 2
    a.apply_extensions([{"blacklist": ["honig"]}])
    assert "honig" not in b.lexicon.blacklist
    assert store.discard(a.session_id) is True
    assert store.discard(a.session_id) is False
    assert len(store) == 1
