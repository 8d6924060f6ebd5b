"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import math


class ConvertUtils:
    _UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]

    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to a display string: "0 B", "512 B", "1.5 KB", "3.2 MB".
        Bytes are shown without decimals, larger units with one.
        """
        if size_bytes <= 0:
            return "0 B"

        units = ConvertUtils._UNITS
        i = min(int(math.log(size_bytes, 1024)), len(units) - 1)
        # log() can land just below an exact power of 1024
        if i + 1 < len(units) and size_bytes >= 1024 ** (i + 1):
            i += 1
        value = size_bytes / (1024 ** i)
        return f"{value:.0f} {units[i]}" if i == 0 else f"{value:.1f} {units[i]}"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert human-readable size string to bytes.
        Supports formats: '1.5GB', '2048KB', '1000', '1K', '1M', '1G', etc.
        Raises ValueError for negative sizes or invalid formats.
        """
        size_str = size_str.strip().upper()

        units = {
            'PB': 1024 ** 5, 'P': 1024 ** 5,
            'TB': 1024 ** 4, 'T': 1024 ** 4,
            'GB': 1024 ** 3, 'G': 1024 ** 3,
            'MB': 1024 ** 2, 'M': 1024 ** 2,
            'KB': 1024, 'K': 1024,
            'B': 1,
        }

        # Longest suffix first so 'KB' is not read as 'K' + 'B'
        for unit in sorted(units.keys(), key=len, reverse=True):
            if size_str.endswith(unit):
                value_str = size_str[:-len(unit)].strip()
                try:
                    value = float(value_str)
                except ValueError:
                    raise ValueError(f"Invalid numeric value in size: '{value_str}'")

                if not math.isfinite(value):
                    raise ValueError(f"Size must be a finite number: '{size_str}'")
                if value < 0:
                    raise ValueError(f"Negative size not allowed: '{size_str}'")
                return int(value * units[unit])

        try:
            value = int(size_str)
        except ValueError:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Supported formats: 1.5GB, 2048KB, 1000, 1K, 1M, etc."
            )

        if value < 0:
            raise ValueError(f"Negative size not allowed: '{size_str}'")
        return value
