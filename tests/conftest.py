import json
import zipfile

import pytest


JMDICT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE JMdict [
<!ENTITY v1 "Ichidan verb">
<!ENTITY v5r-i "Godan verb with 'ru' ending (irregular verb)">
<!ENTITY vt "transitive verb">
<!ENTITY n "noun (common) (futsuumeishi)">
<!ENTITY uk "word usually written using kana alone">
]>
<JMdict>
<entry>
<ent_seq>1358280</ent_seq>
<k_ele><keb>食べる</keb><ke_pri>ichi1</ke_pri><ke_pri>nf03</ke_pri></k_ele>
<r_ele><reb>たべる</reb><re_pri>ichi1</re_pri></r_ele>
<sense><pos>&v1;</pos><pos>&vt;</pos><gloss>to eat</gloss><gloss xml:lang="dut">eten</gloss></sense>
</entry>
<entry>
<ent_seq>1296400</ent_seq>
<r_ele><reb>ある</reb></r_ele>
<sense><pos>&v5r-i;</pos><misc>&uk;</misc><gloss>to be</gloss><gloss>to exist</gloss></sense>
</entry>
<entry>
<ent_seq>1000000</ent_seq>
<k_ele><keb>無駄語</keb></k_ele>
<r_ele><reb>むだご</reb></r_ele>
<sense><pos>&n;</pos><gloss>unused word</gloss></sense>
</entry>
</JMdict>
"""


@pytest.fixture
def jmdict_file(tmp_path):
    path = tmp_path / "JMdict_e.xml"
    path.write_text(JMDICT_XML, encoding="utf-8")
    return path


def make_yomichan_zip(path, title, term_bank=None, kanji_bank=None, fmt=3):
    with zipfile.ZipFile(path, "w") as zip_out:
        zip_out.writestr("index.json", json.dumps({"title": title, "format": fmt}))
        if term_bank is not None:
            zip_out.writestr("term_bank_1.json", json.dumps(term_bank, ensure_ascii=False))
        if kanji_bank is not None:
            zip_out.writestr("kanji_bank_1.json", json.dumps(kanji_bank, ensure_ascii=False))
    return path


@pytest.fixture
def yomichan_file(tmp_path):
    return make_yomichan_zip(
        tmp_path / "jmdict_english.zip",
        "JMdict (English)",
        term_bank=[
            ["食べる", "たべる", "v1", "v1", 100, ["to eat", "to consume"], 1, "P"],
            ["食べる", "たべる", "", "v1", 0, ["to live on"], 2, ""],
            ["ある", "", "v5", "v5", 50, ["to be"], 3, "P"],
        ],
        kanji_bank=[
            ["食", "ショク ジキ", "く.う た.べる", "jouyou", ["eat", "food"], {}],
        ],
    )
