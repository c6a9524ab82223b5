from ja_dictgen.characters import hiragana_to_katakana, is_all_kana
from ja_dictgen.constants import ConjugationClass, KANJI_PRIORITY
from ja_dictgen.lookup_keys import (
    ENDING_TABLE,
    candidate_forms,
    class_boost,
    generate_lookup_keys,
    inflect,
    key_priority,
)
from ja_dictgen.raw_types import WordRecord


def taberu(**kwargs):
    fields = dict(
        writings=("食べる",),
        readings=("たべる",),
        conj=ConjugationClass.ICHIDAN_VERB,
        priority=10,
    )
    fields.update(kwargs)
    return WordRecord(**fields)


def test_ichidan_keys_share_priority():
    keys = generate_lookup_keys(taberu())
    # (10 + 256) // 4
    assert ("食べる", 66) in keys
    assert ("食べない", 66) in keys
    assert ("食べた", 66) in keys
    assert ("食べ", 66) in keys
    assert {priority for _, priority in keys} == {66}


def test_ichidan_every_ending_present():
    keys = {k for k, _ in generate_lookup_keys(taberu())}
    _, endings = ENDING_TABLE[ConjugationClass.ICHIDAN_VERB][0]
    for ending in endings:
        assert "食べ" + ending in keys
        assert "たべ" + ending in keys


def test_all_kana_keys_have_katakana_version():
    for record in (
        taberu(),
        taberu(conj=ConjugationClass.I_ADJECTIVE, writings=("高い",), readings=("たかい",)),
        WordRecord(writings=(), readings=("ある",), usually_kana=True,
                   conj=ConjugationClass.ARU_VERB),
    ):
        keys = generate_lookup_keys(record)
        strings = {k for k, _ in keys}
        for key, priority in keys:
            if is_all_kana(key):
                assert (hiragana_to_katakana(key), priority) in keys
        assert strings


def test_usually_kana_boost():
    record = WordRecord(
        writings=("有る",),
        readings=("ある",),
        conj=ConjugationClass.ARU_VERB,
        usually_kana=True,
        priority=0,
    )
    keys = generate_lookup_keys(record)
    assert keys == [("ある", 32), ("アル", 32), ("有る", 256)]


def test_boost_order_kana_then_class():
    record = taberu(usually_kana=True, priority=100)
    # ((100 + 256) // 8) // 4
    assert key_priority(record, "たべる") == 11
    assert key_priority(record, "食べる") == 89


def test_class_boost():
    assert class_boost(ConjugationClass.ICHIDAN_VERB) == 4
    assert class_boost(ConjugationClass.GODAN_VERB_SU) == 4
    assert class_boost(ConjugationClass.SURU_VERB) == 4
    assert class_boost(ConjugationClass.KURU_VERB) == 4
    assert class_boost(ConjugationClass.IKU_VERB) == 4
    assert class_boost(ConjugationClass.I_ADJECTIVE) == 2
    assert class_boost(ConjugationClass.GODAN_VERB_HU) == 1
    assert class_boost(ConjugationClass.OTHER) == 1


def test_candidate_forms():
    record = WordRecord(writings=("b", "a", "b"), readings=("z", "y"))
    assert candidate_forms(record) == ["a", "b", "z"]
    record = WordRecord(writings=("b",), readings=("z", "y"), usually_kana=True)
    assert candidate_forms(record) == ["b", "y", "z"]


def test_candidates_independent_of_input_order():
    a = WordRecord(writings=("見る", "観る"), readings=("みる",), conj=ConjugationClass.ICHIDAN_VERB)
    b = WordRecord(writings=("観る", "見る"), readings=("みる",), conj=ConjugationClass.ICHIDAN_VERB)
    assert generate_lookup_keys(a) == generate_lookup_keys(b)


def test_godan_and_adjective_endings():
    kau = WordRecord(writings=("買う",), readings=("かう",), conj=ConjugationClass.GODAN_VERB_U)
    keys = {k for k, _ in generate_lookup_keys(kau)}
    assert {"買わない", "買って", "買った", "かわない", "カワナイ"} <= keys

    takai = WordRecord(writings=("高い",), readings=("たかい",), conj=ConjugationClass.I_ADJECTIVE)
    keys = {k for k, _ in generate_lookup_keys(takai)}
    assert {"高", "高く", "高かった", "高かって", "たかかった"} <= keys
    assert "たかくて" not in keys


def test_kuru_replaces_whole_ending():
    kuru = WordRecord(writings=("来る",), readings=("くる",), conj=ConjugationClass.KURU_VERB)
    keys = {k for k, _ in generate_lookup_keys(kuru)}
    assert {"来ない", "来ました", "こない", "きました", "コナイ"} <= keys


def test_suru_verb():
    suru = WordRecord(writings=("勉強する",), readings=("べんきょうする",),
                      conj=ConjugationClass.SURU_VERB)
    keys = {k for k, _ in generate_lookup_keys(suru)}
    assert {"勉強した", "勉強でき", "べんきょうしません"} <= keys


def test_candidate_shorter_than_suffix_gets_bare_keys_only():
    record = WordRecord(writings=(), readings=("す",), conj=ConjugationClass.SURU_VERB)
    priority = (100000 + 256) // 4
    assert generate_lookup_keys(record) == [("す", priority), ("ス", priority)]


def test_wrong_suffix_gets_bare_keys_only():
    record = WordRecord(writings=("食べろ",), readings=("たべろ",), conj=ConjugationClass.ICHIDAN_VERB)
    keys = {k for k, _ in generate_lookup_keys(record)}
    assert keys == {"食べろ", "たべろ", "タベロ"}


def test_inflections_disabled():
    keys = generate_lookup_keys(taberu(), generate_inflections=False)
    assert keys == [("たべる", 66), ("タベル", 66), ("食べる", 66)]


def test_inflect():
    assert inflect("食べる", "る", ("ない", "")) == ["食べない", "食べ"]
    assert inflect("る", "くる", ("こない",)) == []
    assert inflect("食べる", "", ("x",)) == []


def test_keys_sorted_and_unique():
    record = WordRecord(
        writings=("見る", "観る"),
        readings=("みる", "みる"),
        conj=ConjugationClass.ICHIDAN_VERB,
        usually_kana=True,
    )
    keys = generate_lookup_keys(record)
    assert len(keys) == len(set(keys))
    assert keys == sorted(keys, key=lambda k: (k[1], len(k[0].encode("utf-8")), k[0]))


def test_keys_ordered_by_byte_length():
    record = WordRecord(writings=("ABCDE",), readings=("あい",))
    keys = [k for k, _ in generate_lookup_keys(record)]
    # 5 bytes before 6 bytes, although "あい" has fewer characters
    assert keys == ["ABCDE", "あい", "アイ"]


def test_word_priority_never_reserved():
    for conj in ConjugationClass:
        record = WordRecord(writings=(), readings=("ある",), conj=conj,
                            usually_kana=True, priority=0)
        assert all(p > KANJI_PRIORITY for _, p in generate_lookup_keys(record))
