from clonesweep.core.models import ScanMode

SCAN_MODE_ALIASES = {
    "strict": ScanMode.STRICT,
    "size_only": ScanMode.SIZE_ONLY,
}

SCAN_MODE_CHOICES = list(SCAN_MODE_ALIASES.keys())

SCAN_MODE_HELP_TEXT = (
    "Scan mode:\n"
    "  strict     : Size → Front Hash → SHA-256 (exact duplicates only)\n"
    "  size_only  : Size only (fastest; equal-size files are reported even if content differs)\n"
    "Example:\n"
    "  %(prog)s -i ~/Downloads --mode size_only"
)

EPILOG_TEXT = """
Examples:
  Find duplicates in Downloads folder
  %(prog)s -i ~/Downloads

  Ignore files under 500KB and skip a folder
  %(prog)s -i ~/Downloads -m 500KB -e ~/Downloads/keep

  Keep the largest file of each group, move the rest to trash (with confirmation prompt)
  %(prog)s -i ~/Downloads --keep-largest

  Same as above but without confirmation (for scripts)
  %(prog)s -i ~/Downloads --keep-largest --force

  Machine-readable output
  %(prog)s -i ~/Downloads --json > report.json
"""
