# best_times.py
import json
import os
import sys

# ==== DETECT WEB ====
IS_WEB = sys.platform == "emscripten"

BEST_TIMES_FILE = os.environ.get("MAZE_BEST_TIMES_FILE", "best_times.json")
STORAGE_KEY = "maze_best_times"


def parse_record(raw):
    """
    Ubah JSON mentah jadi {level: detik}.
    Entry yang rusak dilewati; JSON yang tidak bisa dibaca = belum ada data.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        print(f"⚠️ Best times record is corrupt, ignoring it: {e}")
        return {}

    if not isinstance(data, dict):
        print("⚠️ Best times record is not a mapping, ignoring it")
        return {}

    record = {}
    for key, value in data.items():
        try:
            level = int(key)
        except ValueError:
            print(f"⚠️ Skipping best time with bad level {key!r}")
            continue
        if isinstance(value, bool) or not isinstance(value, int) or level < 1 or value < 0:
            print(f"⚠️ Skipping bad best time for level {key!r}: {value!r}")
            continue
        # "1" dan "01" sama-sama level 1: simpan yang lebih cepat
        if level in record and record[level] <= value:
            continue
        record[level] = value
    return record


class BestTimes:
    """Best completion time (detik) per level, disimpan ke file atau localStorage."""

    def __init__(self, path=BEST_TIMES_FILE, storage_key=STORAGE_KEY, web=IS_WEB):
        self.path = path
        self.storage_key = storage_key
        self.web = web
        self.times = {}

    def load(self):
        raw = self._read()
        self.times = parse_record(raw) if raw else {}
        if self.times:
            print(f"✅ Loaded {len(self.times)} best times")
        return self.times

    def save(self):
        data = json.dumps({str(level): t for level, t in sorted(self.times.items())})
        try:
            self._write(data)
        except OSError as e:
            print(f"❌ Failed to save best times: {e}")
            return False
        print("💾 Best times saved")
        return True

    def get(self, level):
        return self.times.get(level)

    def submit(self, level, seconds):
        """Simpan kalau belum ada best time atau waktunya lebih cepat."""
        if seconds < 0:
            raise ValueError(f"seconds must be non-negative, got {seconds!r}")
        current = self.times.get(level)
        if current is not None and seconds >= current:
            return False
        self.times[level] = seconds
        self.save()
        return True

    def reset(self):
        self.times = {}
        self.save()

    def _read(self):
        if self.web:
            import js
            try:
                return js.localStorage.getItem(self.storage_key)
            except Exception as e:
                # pyodide JsException (SecurityError dll), bukan OSError
                print(f"⚠️ Could not read localStorage: {e}")
                return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            print(f"⚠️ Could not read {self.path}: {e}")
            return None

    def _write(self, data):
        if self.web:
            import js
            try:
                js.localStorage.setItem(self.storage_key, data)
            except Exception as e:
                raise OSError(f"localStorage write failed: {e}") from e
            return
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(data)
