"""
Rule 20 — Image References

Worksheets embed images as <img src="lesson5_files/01.png">, where the
folder is named after the document and images are numbered from 01
without gaps. This rule checks three things:

- Tag typos: a "<name>_files/NN.png" path that no well-formed tag
  accounts for is looked up in the surrounding text for a mistyped tag
  (<im, <imge, <image, <i mg, or a mangled src attribute). If none is
  found, the bare path itself is reported.
- Folder names: every well-formed tag should point into
  "<document stem>_files".
- Numbering: image numbers must be unique, start at 01 and increase by
  one.

Tags written with the near-miss "sc" attribute count as well formed, so
they take part in the folder and numbering checks, but no folder fix is
offered for them.
"""

import re
from collections import Counter
from pathlib import PurePosixPath
from typing import Optional

from edval.config.models import ValidatorSettings
from edval.core.contracts import Document
from edval.core.logging import LogChannel, get_rule_logger
from edval.ir.enums import DiagnosticCode, Severity
from edval.ir.matches import ImageMatch
from edval.ir.schema import Diagnostic
from edval.rules.common import (
    context_window,
    make_diagnostic,
    make_fix,
    padded_span,
    scan,
    tag_end,
    zero_pad,
)

RULE_NAME = "r20_images"
log = get_rule_logger(RULE_NAME)
extract_log = get_rule_logger(RULE_NAME, LogChannel.EXTRACT)

# Well-formed tags: canonical attribute, then the common "sc" slip
SRC_TAG_PATTERN = re.compile(r'<img\s+[^>]*?src="([^"]*)"[^>]*>', re.IGNORECASE)
SC_TAG_PATTERN = re.compile(r'<img\s+[^>]*?sc="([^"]*)"[^>]*>', re.IGNORECASE)

# Numbered image paths, wherever they appear
FILES_PATH_PATTERN = re.compile(r"(\w+)_files/(\d+)\.png", re.IGNORECASE)

# Checked in order; the first hit wins
TYPO_PATTERNS = [
    re.compile(r'<im\s+[^>]*?(?:src|sc)="[^"]*"', re.IGNORECASE),     # <im
    re.compile(r'<imge\s+[^>]*?(?:src|sc)="[^"]*"', re.IGNORECASE),   # <imge
    re.compile(r'<image\s+[^>]*?(?:src|sc)="[^"]*"', re.IGNORECASE),  # <image
    re.compile(r'<i mg\s+[^>]*?(?:src|sc)="[^"]*"', re.IGNORECASE),   # <i mg
    re.compile(r'<\s*img[^>]*?(?:s|sr|rc|scr)="[^"]*"', re.IGNORECASE),  # src misspelled
]

IMAGE_NUMBER_PATTERN = re.compile(r"/(\d+)\.")


# =============================================================================
# Extraction
# =============================================================================

def extract_well_formed_images(text: str) -> list[ImageMatch]:
    """
    Find well-formed image tags.

    All ``src`` tags come first in document order, followed by all
    ``sc`` tags in document order.
    """
    images = [
        ImageMatch(full_text=m.group(0), src=m.group(1), start=m.start())
        for m in scan(SRC_TAG_PATTERN, text)
    ]
    images.extend(
        ImageMatch(full_text=m.group(0), src=m.group(1), start=m.start(), has_sc_attribute=True)
        for m in scan(SC_TAG_PATTERN, text)
    )
    return images


def expected_folder_name(document_name: str, suffix: str = "_files") -> str:
    """lesson5.html -> lesson5_files. Works for POSIX, Windows and URI names."""
    base = re.split(r"[\\/]", document_name)[-1]
    return f"{PurePosixPath(base).stem}{suffix}"


def extract_image_number(src: str) -> Optional[int]:
    m = IMAGE_NUMBER_PATTERN.search(src)
    return int(m.group(1)) if m else None


# =============================================================================
# Checks
# =============================================================================

def detect_tag_typos(
    text: str,
    images: list[ImageMatch],
    settings: Optional[ValidatorSettings] = None,
) -> list[Diagnostic]:
    """
    Report image paths that sit outside any well-formed tag.

    Each distinct path is examined once, at its first occurrence.
    """
    settings = settings or ValidatorSettings()
    window_radius = settings.images.typo_window
    diagnostics: list[Diagnostic] = []

    # Ordered and de-duplicated
    paths = list(dict.fromkeys(m.group(0) for m in scan(FILES_PATH_PATTERN, text)))
    if not paths:
        return diagnostics

    for path in paths:
        if any(path in image.src for image in images):
            continue

        path_start = text.find(path)
        path_end = path_start + len(path)
        window_start, window = context_window(text, path_start, path_end, window_radius)
        correct_tag = f'<img src="{path}">'

        for pattern in TYPO_PATTERNS:
            typo = pattern.search(window)
            if not typo:
                continue

            typo_start = window_start + typo.start()
            typo_end = window_start + typo.end()
            diagnostics.append(make_diagnostic(
                RULE_NAME,
                Severity.ERROR,
                DiagnosticCode.IMAGE_TAG_TYPO,
                f"Possible typo in image tag. Should be {correct_tag}",
                typo_start,
                typo_end,
                settings,
                # Replace through the closing ">" so the fix leaves one tag behind
                fix=make_fix(typo_start, tag_end(text, typo_end), correct_tag),
            ))
            log.verbose("tag_typo_found", path=path, typo=typo.group(0)[:40])
            break

        if not any(d.covers(path_start) for d in diagnostics):
            start, end = padded_span(text, path_start, path_end, settings.images.stray_path_padding)
            diagnostics.append(make_diagnostic(
                RULE_NAME,
                Severity.WARNING,
                DiagnosticCode.IMAGE_PATH_OUTSIDE_TAG,
                "File path found outside a proper <img> tag. Check for HTML syntax errors.",
                start,
                end,
                settings,
            ))
            log.verbose("stray_image_path", path=path, offset=path_start)

    return diagnostics


def validate_folder_names(
    images: list[ImageMatch],
    expected_folder: str,
    settings: Optional[ValidatorSettings] = None,
) -> list[Diagnostic]:
    """Report tags whose src does not point into ``expected_folder``."""
    diagnostics: list[Diagnostic] = []

    for image in images:
        if not image.src or expected_folder in image.src:
            continue

        fix = None
        if not image.has_sc_attribute:
            corrected_src = f"{expected_folder}/{PurePosixPath(image.src).name}"
            corrected_tag = image.full_text.replace(image.src, corrected_src, 1)
            fix = make_fix(image.start, image.end, corrected_tag)

        diagnostics.append(make_diagnostic(
            RULE_NAME,
            Severity.WARNING,
            DiagnosticCode.IMAGE_FOLDER,
            f'Image source should be in "{expected_folder}" folder',
            image.start,
            image.end,
            settings,
            fix=fix,
        ))

    return diagnostics


def validate_image_numbering(
    images: list[ImageMatch],
    settings: Optional[ValidatorSettings] = None,
) -> list[Diagnostic]:
    """
    Check that image numbers are unique, start at 01 and have no gaps.

    When several images share a number, findings for that number point
    at the last of them.
    """
    settings = settings or ValidatorSettings()
    width = settings.images.number_width
    first_expected = settings.images.first_number

    numbers: list[int] = []
    by_number: dict[int, ImageMatch] = {}
    for image in images:
        number = extract_image_number(image.src)
        if number is None:
            continue
        numbers.append(number)
        by_number[number] = image

    if not numbers:
        return []

    diagnostics: list[Diagnostic] = []
    ordered = sorted(numbers)

    counts = Counter(numbers)
    for number in sorted(counts):
        if counts[number] > 1:
            image = by_number[number]
            diagnostics.append(make_diagnostic(
                RULE_NAME,
                Severity.ERROR,
                DiagnosticCode.IMAGE_DUPLICATE_NUMBER,
                f"Duplicate image number: {number} is used {counts[number]} times",
                image.start,
                image.end,
                settings,
            ))

    first = ordered[0]
    if first != first_expected:
        image = by_number[first]
        diagnostics.append(make_diagnostic(
            RULE_NAME,
            Severity.WARNING,
            DiagnosticCode.IMAGE_NUMBER_START,
            f"Image numbering should start with {zero_pad(first_expected, width)}, "
            f"found {zero_pad(first, width)}",
            image.start,
            image.end,
            settings,
        ))

    for previous, current in zip(ordered, ordered[1:]):
        if current == previous + 1:
            continue
        image = by_number[current]
        diagnostics.append(make_diagnostic(
            RULE_NAME,
            Severity.WARNING,
            DiagnosticCode.IMAGE_NUMBER_GAP,
            f"Image numbering is not sequential. Expected {zero_pad(previous + 1, width)}, "
            f"found {zero_pad(current, width)}",
            image.start,
            image.end,
            settings,
        ))

    return diagnostics


# =============================================================================
# Rule entry point
# =============================================================================

def validate(document: Document, settings: Optional[ValidatorSettings] = None) -> list[Diagnostic]:
    """Run the typo, folder and numbering checks over one document."""
    settings = settings or ValidatorSettings()
    text = document.text

    images = extract_well_formed_images(text)
    extract_log.debug("images_extracted",
        count=len(images),
        sc_attribute=sum(1 for i in images if i.has_sc_attribute),
    )

    diagnostics = detect_tag_typos(text, images, settings)

    if not images:
        return diagnostics

    expected_folder = expected_folder_name(document.name, settings.images.folder_suffix)
    diagnostics.extend(validate_folder_names(images, expected_folder, settings))
    diagnostics.extend(validate_image_numbering(images, settings))

    return diagnostics
