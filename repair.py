#!/usr/bin/env python3
"""
HTML Accessibility Repair - Convenience CLI Script

Repair common WCAG 2.1 AA accessibility defects in an HTML/CSS fragment.

Usage:
    python repair.py input.html [options]

Options:
    -o, --output FILE     Repaired HTML (default: stdout)
    -r, --report FILE     Issue report (default: stderr, or stdout with -o)
    -f, --format FMT      Report format: text or json (default: text)
    -c, --config FILE     JSON configuration file
    --config-json JSON    Inline JSON configuration
    -t, --template FILE   Sample HTML to learn placeholder wording from
    --strict              Exit 2 when any issue needs manual review
    --list-rules          Print the rule catalog and exit
    -v, --verbose         Verbose output
    --version             Show version

Examples:
    python repair.py page.html -o page.fixed.html
    python repair.py page.html -f json -r report.json -o page.fixed.html
    python repair.py page.html --config-json '{"rules": {"disabled": ["link-title"]}}'
"""

import sys
from pathlib import Path

# Add package to path if running directly
package_dir = Path(__file__).parent
if str(package_dir) not in sys.path:
    sys.path.insert(0, str(package_dir))

from a11y_repair.cli import main

if __name__ == '__main__':
    sys.exit(main())
