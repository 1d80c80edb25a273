# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.
