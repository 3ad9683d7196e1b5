# This file is part of RQMap.
# Licensed under MIT License.
