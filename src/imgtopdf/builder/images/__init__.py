"""
Module: builder.images

Purpose:
    Image access for the conversion pipeline: inspection, resample
    planning and re-encoding. Pixel work is done by Pillow.

Key Classes:
    - ResamplePlan: Downscale decision for one image

Key Functions:
    - inspect_files(): Pre-flight inspection of selected files
    - plan_resample(): Decide whether/how far to downscale
    - process_image(): Produce an embeddable ProcessedImage

Dependencies:
    - PIL, pillow_heif
    - builder.layout: Slot size for resample planning

Used By:
    - builder.controller: Per-image processing
    - cli: Inspection output
"""

from .resample import ResamplePlan, plan_resample, slot_size_inches
from .inspector import inspect_files, inspect_file, open_image, read_dpi
from .processor import process_image, target_format

__all__ = [
    "ResamplePlan",
    "plan_resample",
    "slot_size_inches",
    "inspect_files",
    "inspect_file",
    "open_image",
    "read_dpi",
    "process_image",
    "target_format",
]
