from shiritori.logic.kana import ROW_OF, ROW_VOWEL, VowelRow, fold_katakana, is_kanji, load_readings, to_canonical_script


class TestFoldKatakana:
    def test_folds_katakana(self):
        assert fold_katakana("リンゴ") == "りんご"
        assert fold_katakana("ャッ") == "ゃっ"

    def test_leaves_hiragana_and_long_vowel_mark(self):
        assert fold_katakana("るびー") == "るびー"

    def test_mixed_text(self):
        assert fold_katakana("アイスcream") == "あいすcream"


class TestRowTables:
    def test_every_row_has_a_vowel(self):
        assert set(ROW_VOWEL) == set(VowelRow)

    def test_o_row_lengthens_to_u(self):
        assert ROW_OF["よ"] == VowelRow.O
        assert ROW_VOWEL[VowelRow.O] == "う"


class TestToCanonicalScript:
    def test_known_kanji_word(self):
        assert to_canonical_script("林檎") == "りんご"

    def test_katakana_word(self):
        assert to_canonical_script("ゴリラ") == "ごりら"

    def test_hiragana_unchanged(self):
        assert to_canonical_script("らっぱ") == "らっぱ"

    def test_latin_text_unchanged(self):
        assert to_canonical_script("apple") == "apple"
        assert to_canonical_script("りんご1") == "りんご1"

    def test_full_width_latin_unchanged(self):
        assert to_canonical_script("ａｐｐｌｅ") == "ａｐｐｌｅ"

    def test_kanji_run_resolved_per_character(self):
        assert to_canonical_script("猫犬") == "ねこいぬ"

    def test_unknown_kanji_kept(self):
        assert to_canonical_script("鬱") == "鬱"

    def test_empty(self):
        assert to_canonical_script("") == ""

    def test_mixed_kanji_and_katakana(self):
        assert to_canonical_script("猫カフェ") == "ねこかふぇ"


class TestReadings:
    def test_readings_are_cached(self):
        assert load_readings() is load_readings()

    def test_readings_are_hiragana(self):
        assert all(not is_kanji(char) for reading in load_readings().values() for char in reading)

    def test_is_kanji(self):
        assert is_kanji("猫")
        assert not is_kanji("ね")
