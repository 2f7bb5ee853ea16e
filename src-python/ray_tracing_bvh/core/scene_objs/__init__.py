"""
Copyright 2026 ray-tracing-bvh authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from .material import Material
from .base_shape import BaseShape, ShapeKind, point_in_polygon
from .rectangle import Rectangle, Square
from .ellipse import Ellipse, Circle
from .triangle import Triangle, EquilateralTriangle
from .focal_point import FocalPoint
from .target import Target

__all__ = ['Material', 'BaseShape', 'ShapeKind', 'point_in_polygon', 'Rectangle', 'Square', 'Ellipse', 'Circle', 'Triangle', 'EquilateralTriangle', 'FocalPoint', 'Target']
