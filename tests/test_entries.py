from ja_dictgen.constants import (
    KANJI_PRIORITY,
    NAME_PRIORITY,
    ConjugationClass,
    PartOfSpeech,
)
from ja_dictgen.entries import (
    WORD_TYPE_END,
    WORD_TYPE_START,
    EntrySettings,
    LangMode,
    build_word_table,
    definition_to_html,
    generate_definition_text,
    generate_entries,
    generate_header_text,
    generate_kanji_entry_text,
    generate_name_entry_text,
    word_table_key,
)
from ja_dictgen.lookup_keys import generate_lookup_keys
from ja_dictgen.raw_types import DefinitionList, KanjiRecord, TermRecord, WordRecord


TABERU = WordRecord(
    writings=("食べる",),
    readings=("たべる",),
    conj=ConjugationClass.ICHIDAN_VERB,
    pos=PartOfSpeech.VERB,
    priority=3500,
    tags=frozenset({"pos:v1", "pos:vt"}),
)

MUDAGO = WordRecord(writings=("無駄語",), readings=("むだご",), pos=PartOfSpeech.NOUN)


def term(definitions, dict_name="jmdict"):
    return TermRecord(dict_name=dict_name, writing="食べる", reading="たべる",
                      definitions=definitions)


# ============================================================================
# HTML rendering
# ============================================================================

def test_plain_definition():
    assert definition_to_html("to eat", 0, True) == "<ol><li>to eat</li></ol>"
    assert definition_to_html("to eat", 0, False) == "<ul><li>to eat</li></ul>"
    assert definition_to_html("to eat", 1, True) == "to eat"


def test_single_item_list_collapses():
    definition = DefinitionList("", ["to eat"])
    assert definition_to_html(definition, 1, True) == "<ol><li>to eat</li></ol>"


def test_flat_list():
    definition = DefinitionList("", ["to eat", "to live on"])
    assert definition_to_html(definition, 1, True) == (
        '<ol style="list-style-type: decimal"><li>to eat</li><li>to live on</li></ol>'
    )
    assert definition_to_html(definition, 1, False) == (
        "<ul><li>to eat</li><li>to live on</li></ul>"
    )


def test_list_header():
    definition = DefinitionList("食べること", ["a", "b"])
    html = definition_to_html(definition, 1, True)
    assert html.startswith("<p>食べること</p><ol")


def test_nested_list_styles():
    definition = DefinitionList("", [
        DefinitionList("", ["a", "b"]),
        DefinitionList("", ["c", "d"]),
    ])
    html = definition_to_html(definition, 2, True)
    assert html.startswith('<ol style="list-style-type: upper-roman"><li><ol style="list-style-type: decimal">')
    assert html.count("<li>") == 6


def test_header_text():
    header = generate_header_text(EntrySettings(), "タベル", [0], TABERU)
    assert header == (
        "たべる [0] &nbsp;&nbsp;&mdash; 【食べる】"
        + WORD_TYPE_START + "verb, transitive, ichidan" + WORD_TYPE_END
    )


def test_header_text_settings():
    settings = EntrySettings(lang_mode=LangMode.JAPANESE, use_katakana_pronunciation=True)
    header = generate_header_text(settings, "タベル", [0, 2], TABERU)
    assert header.startswith("タベル [0][2] ")
    assert "動詞、他動、一段" in header

    settings = EntrySettings(lang_mode=LangMode.ENGLISH_ALT)
    assert "verb, other-move, ichidan" in generate_header_text(settings, "タベル", None, TABERU)


def test_header_text_usually_kana():
    aru = WordRecord(writings=("有る",), readings=("ある",), conj=ConjugationClass.ARU_VERB,
                     pos=PartOfSpeech.VERB, usually_kana=True)
    header = generate_header_text(EntrySettings(), "アル", None, aru)
    assert header.startswith("ある &nbsp;&nbsp;&mdash; 【ある／有る】")
    assert "verb, irregular" in header

    kana_only = WordRecord(writings=(), readings=("ある",))
    assert "【ある】" in generate_header_text(EntrySettings(), "アル", None, kana_only)


def test_header_text_adjective():
    takai = WordRecord(writings=("高い",), readings=("たかい",), conj=ConjugationClass.I_ADJECTIVE,
                       pos=PartOfSpeech.ADJECTIVE)
    header = generate_header_text(EntrySettings(), "タカイ", None, takai)
    assert header.endswith(WORD_TYPE_START + "i-adjective" + WORD_TYPE_END)


def test_noun_header_has_no_word_type():
    header = generate_header_text(EntrySettings(), "ムダゴ", None, MUDAGO)
    assert WORD_TYPE_START not in header


def test_definition_text():
    text = generate_definition_text([term(DefinitionList("", ["to eat"]))])
    assert text == '<div style="margin-top: 0.7em"><p><ol><li>to eat</li></ol></p></div>'

    text = generate_definition_text([
        term(DefinitionList("", ["to eat"])),
        term(DefinitionList("", ["たべる"]), dict_name="daijirin"),
    ])
    assert "<p>jmdict:<br/>" in text
    assert "<p>daijirin:<br/>" in text


def test_name_entry_text():
    name = TermRecord(dict_name="jmnedict", writing="田中", reading="たなか",
                      definitions=DefinitionList("", ["Tanaka"]), tags=["surname"])
    assert generate_name_entry_text(EntrySettings(), name) == (
        "たなか &nbsp;&nbsp;&mdash; 【田中】"
        + WORD_TYPE_START + "name: surname" + WORD_TYPE_END
        + "<ul><li>Tanaka</li></ul>"
    )


def test_kanji_entry_text():
    kanji = KanjiRecord(dict_name="kanjidic", kanji="食", onyomi=["ショク", "ジキ"],
                        kunyomi=["く.う", "た.べる"], meanings=["eat", "food"])
    text = generate_kanji_entry_text(kanji)
    assert '<span style="font-size: 2.0em;">食</span>　eat, food</p>' in text
    assert "音:　ショク／ジキ</p>" in text
    assert "訓:　く.う／た.べる</p>" in text


def test_kanji_entry_text_without_meanings():
    text = generate_kanji_entry_text(KanjiRecord(dict_name="kanjidic", kanji="々"))
    assert text.endswith("々</span></p>")
    assert "音" not in text


# ============================================================================
# Entry generation
# ============================================================================

def test_word_table():
    other = WordRecord(writings=("食べる",), readings=("たべる",))
    no_reading = WordRecord(writings=("食",), readings=())
    table = build_word_table([TABERU, other, no_reading, MUDAGO])
    assert word_table_key(TABERU) == ("食べる", "タベル")
    assert table[("食べる", "タベル")] == [TABERU, other]
    assert set(table) == {("食べる", "タベル"), ("無駄語", "ムダゴ")}


def test_generate_entries():
    term_table = {("食べる", "タベル"): [term(DefinitionList("", ["to eat"]))]}
    name_table = {("田中", "タナカ"): [
        TermRecord(dict_name="jmnedict", writing="田中", reading="たなか",
                   definitions=DefinitionList("", ["Tanaka"])),
        TermRecord(dict_name="jmnedict", writing="田中", reading="たなか",
                   definitions=DefinitionList("", ["Tanaka (given)"])),
    ]}
    kanji_table = {"食": [
        KanjiRecord(dict_name="kanjidic", kanji="食", meanings=["eat"]),
        KanjiRecord(dict_name="other", kanji="食", meanings=["meal"]),
    ]}
    word_table = build_word_table([TABERU, MUDAGO])

    entries = generate_entries(term_table, name_table, kanji_table, word_table, {})

    assert len(entries) == 4
    assert entries[0].keys == [("食", KANJI_PRIORITY)]
    assert entries[0].definition.startswith("<hr/><p")
    assert "meal" not in entries[0].definition

    word = entries[1]
    assert word.keys == generate_lookup_keys(TABERU)
    assert word.definition.startswith("<hr/>たべる &nbsp;")
    assert "<li>to eat</li>" in word.definition

    names = entries[2:]
    assert [n.keys for n in names] == [[("田中", NAME_PRIORITY)]] * 2
    assert all(e.definition.startswith("<hr/>") for e in entries)

    lengths = [len(e.keys[0][0].encode("utf-8")) for e in entries]
    assert lengths == sorted(lengths)


def test_word_with_only_pitch_accent_is_kept():
    word_table = build_word_table([MUDAGO])
    entries = generate_entries({}, {}, {}, word_table, {("無駄語", "ムダゴ"): [1]})
    assert len(entries) == 1
    assert "むだご [1]" in entries[0].definition

    assert generate_entries({}, {}, {}, word_table, {}) == []


def test_generate_entries_without_inflections():
    term_table = {("食べる", "タベル"): [term(DefinitionList("", ["to eat"]))]}
    settings = EntrySettings(generate_inflection_keys=False)
    entries = generate_entries(term_table, {}, {}, build_word_table([TABERU]), {}, settings)
    assert {k for k, _ in entries[0].keys} == {"たべる", "タベル", "食べる"}


def test_entries_sorted_by_first_key_length():
    long_word = WordRecord(writings=("食べ物屋さん",), readings=("たべものやさん",))
    short_word = WordRecord(writings=("木",), readings=("き",))
    pitch = {("食べ物屋さん", "タベモノヤサン"): [0], ("木", "キ"): [1]}
    entries = generate_entries({}, {}, {}, build_word_table([long_word, short_word]), pitch)
    assert [e.keys[0][0] for e in entries] == ["木", "食べ物屋さん"]


def test_entries_sorted_by_first_key_bytes():
    kana_word = WordRecord(writings=(), readings=("あい",))
    latin_word = WordRecord(writings=("ABCD",), readings=("えーびーしーでぃー",))
    pitch = {("あい", "アイ"): [1], ("ABCD", "エービーシーディー"): [0]}
    entries = generate_entries({}, {}, {}, build_word_table([kana_word, latin_word]), pitch)
    # "ABCD" is 4 bytes and "あい" is 6
    assert [e.keys[0][0] for e in entries] == ["ABCD", "あい"]
