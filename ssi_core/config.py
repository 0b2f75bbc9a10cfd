# ssi_core/config.py
# -*- coding: utf-8 -*-
import json
from pathlib import Path

class AppConfig:
    def __init__(self, settings_filename='settings.json', settings_path=None):
        # Defaults resolve against the working directory, not the install location.
        self.base_dir = Path.cwd()
        self.settings_path = Path(settings_path) if settings_path else self.base_dir / settings_filename
        self.defaults = {
            # --- Interpreter ---
            'selection_cap': 1000,
            'script_builtins': 'safe',  # 'safe' or 'full'
            'last_script': '',

            # --- Document geometry (0 = use PlayResX/PlayResY) ---
            'frame_width': 0,
            'frame_height': 0,

            # --- I/O ---
            'input_encoding': 'utf-8',
            'output_encoding': 'utf-8',

            # --- Logging ---
            'logs_folder': str(self.base_dir / 'logs'),
            'archive_logs': False,
            'log_progress_step': 20,
        }
        self.settings = self.defaults.copy()
        self.load()
        self.ensure_dirs_exist()

    def load(self):
        changed = False
        if self.settings_path.exists():
            try:
                with open(self.settings_path, 'r', encoding='utf-8') as f:
                    loaded_settings = json.load(f)

                if loaded_settings.get('script_builtins') not in ('safe', 'full'):
                    loaded_settings['script_builtins'] = 'safe'
                    changed = True

                for key, default_value in self.defaults.items():
                    if key not in loaded_settings:
                        loaded_settings[key] = default_value
                        changed = True
                self.settings = loaded_settings
            except (json.JSONDecodeError, IOError):
                self.settings = self.defaults.copy()
                changed = True
        else:
            self.settings = self.defaults.copy()
            changed = True

        if changed:
            self.save()

    def save(self):
        try:
            keys_to_save = self.defaults.keys()
            settings_to_save = {k: self.settings.get(k) for k in keys_to_save if k in self.settings}
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(settings_to_save, f, indent=4)
        except IOError as e:
            print(f"Error saving settings: {e}")

    def get(self, key: str, default=None):
        return self.settings.get(key, default)

    def set(self, key: str, value):
        self.settings[key] = value

    def ensure_dirs_exist(self):
        Path(self.get('logs_folder')).mkdir(parents=True, exist_ok=True)
