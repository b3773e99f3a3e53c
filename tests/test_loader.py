import json
import tempfile
import unittest
from pathlib import Path

from vocabdrill.config.config import default_levels_dir
from vocabdrill.core.word_item import PRONUNCIATION_UNAVAILABLE
from vocabdrill.data.loader import LevelLibrary, LevelLoadError, load_level


def _doc(level: str, words_per_unit=(2, 1)) -> dict:
    units = []
    for u, n in enumerate(words_per_unit):
        units.append(
            {
                "unit": f"Unit {u + 1}",
                "words": [
                    {"word": f"w{u}{i}", "syllables": f"w{u}·{i}", "pronunciation": "" if i else "/w/", "meaning": f"m{u}{i}"}
                    for i in range(n)
                ],
            }
        )
    return {"level": level, "version": "1.0", "lastUpdated": "2025-03-01", "units": units}


class LoaderTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write_json(self, name: str, doc: dict) -> Path:
        p = self.dir / name
        p.write_text(json.dumps(doc, ensure_ascii=False), encoding="utf-8")
        return p

    def test_load_json_level(self) -> None:
        level = load_level(self._write_json("levelA.json", _doc("A")), "A")
        self.assertEqual(level.id, "A")
        self.assertEqual(level.version, "1.0")
        self.assertEqual(level.last_updated, "2025-03-01")
        self.assertEqual([u.word_count for u in level.units], [2, 1])
        first = level.units[0].items[0]
        self.assertEqual((first.text, first.unit_index), ("w00", 0))
        self.assertEqual(level.units[0].items[1].pronunciation, PRONUNCIATION_UNAVAILABLE)
        self.assertEqual(level.units[1].items[0].unit_index, 1)

    def test_load_yaml_level(self) -> None:
        p = self.dir / "levelB.yml"
        p.write_text(
            "level: B\nunits:\n  - unit: Kitchen\n    words:\n      - word: cup\n        meaning: 杯子\n",
            encoding="utf-8",
        )
        level = load_level(p, "B")
        self.assertEqual(level.units[0].name, "Kitchen")
        self.assertEqual(level.units[0].items[0].meaning, "杯子")
        self.assertFalse(level.units[0].items[0].has_pronunciation)

    def test_text_key_accepted(self) -> None:
        doc = {"level": "C", "units": [{"unit": "U", "words": [{"text": "fry", "pronunciation": " /fraɪ/ "}]}]}
        item = load_level(self._write_json("levelC.json", doc), "C").units[0].items[0]
        self.assertEqual(item.text, "fry")
        self.assertEqual(item.pronunciation, "/fraɪ/")
        self.assertEqual(item.unit_index, 0)
        self.assertTrue(item.has_pronunciation)

    def test_bad_documents_raise(self) -> None:
        with self.assertRaises(LevelLoadError):
            load_level(self.dir / "missing.json")
        bad = self.dir / "levelX.json"
        bad.write_text('{"units": [{"words": "not a list"}]}', encoding="utf-8")
        with self.assertRaises(LevelLoadError):
            load_level(bad)
        broken = self.dir / "levelY.yml"
        broken.write_text("units: [\n", encoding="utf-8")
        with self.assertRaises(LevelLoadError):
            load_level(broken)

    def test_library_caches_and_lists(self) -> None:
        self._write_json("levelH.json", _doc("H"))
        self._write_json("levelE.json", _doc("E", (1,)))
        lib = LevelLibrary(self.dir)
        self.assertEqual(lib.available(), ["E", "H"])
        first = lib.load("E")
        self.assertTrue(lib.is_loaded("E"))
        self.assertIs(lib.load("E"), first)
        self.assertIs(lib.current, first)
        self.assertIsNone(lib.set_current("Q"))

    def test_library_falls_back(self) -> None:
        self._write_json("levelH.json", _doc("H"))
        lib = LevelLibrary(self.dir, fallback_level="H")
        level = lib.load("Z")
        self.assertEqual(level.id, "H")
        self.assertEqual(lib.current_level_id, "H")
        self.assertFalse(lib.is_loaded("Z"))

    def test_library_raises_when_fallback_missing(self) -> None:
        lib = LevelLibrary(self.dir)
        with self.assertRaises(LevelLoadError):
            lib.load("H")
        with self.assertRaises(ValueError):
            lib.load("")

    def test_packaged_level_h(self) -> None:
        level = LevelLibrary(default_levels_dir()).load("H")
        self.assertEqual(level.id, "H")
        self.assertEqual(len(level.units), 6)
        self.assertTrue(level.all_units_selected)
        self.assertEqual(len(level.selected_items()), level.word_count)


class UnitSelectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        p = Path(self._tmp.name) / "levelA.json"
        p.write_text(json.dumps(_doc("A", (2, 1, 3))), encoding="utf-8")
        self.level = load_level(p, "A")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_select_toggle_and_items(self) -> None:
        self.level.select_units([2, 0, 2])
        self.assertEqual(self.level.selected_unit_indices, [2, 0])
        self.assertEqual([w.text for w in self.level.selected_items()], ["w20", "w21", "w22", "w00", "w01"])
        self.assertFalse(self.level.toggle_unit(0))
        self.assertTrue(self.level.toggle_unit(1))
        self.assertTrue(self.level.is_unit_selected(1))
        self.assertFalse(self.level.all_units_selected)

    def test_select_all_and_none(self) -> None:
        self.level.deselect_all_units()
        self.assertEqual(self.level.selected_items(), [])
        self.level.select_all_units()
        self.assertTrue(self.level.all_units_selected)

    def test_unknown_unit(self) -> None:
        with self.assertRaises(KeyError):
            self.level.select_units([7])

    def test_toggle_unknown_unit(self) -> None:
        self.level.select_units([0])
        with self.assertRaises(KeyError):
            self.level.toggle_unit(5)
        self.assertEqual(self.level.selected_unit_indices, [0])
        self.assertFalse(self.level.all_units_selected)


if __name__ == "__main__":
    unittest.main()
