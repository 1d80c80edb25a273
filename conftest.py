# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

# The pytest configuration collects every *.py file; these are not test modules.
collect_ignore = ["setup.py", "noxfile.py"]
