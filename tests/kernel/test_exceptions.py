# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for the flymap exception hierarchy."""

import pytest

from flymap.kernel.exceptions import (
    BeanRegistrationException,
    FieldAccessDeniedException,
    FieldAccessException,
    FieldNotFoundException,
    FlymapException,
    InvalidArgumentException,
    MappingException,
    ValidationException,
)


class Sample:
    pass


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type",
        [
            BeanRegistrationException,
            FieldAccessException,
            InvalidArgumentException,
            MappingException,
            ValidationException,
        ],
    )
    def test_all_derive_from_base(self, exc_type):
        assert issubclass(exc_type, FlymapException)

    def test_field_failures_share_a_base(self):
        assert issubclass(FieldNotFoundException, FieldAccessException)
        assert issubclass(FieldAccessDeniedException, FieldAccessException)

    def test_invalid_argument_is_value_error(self):
        assert issubclass(InvalidArgumentException, ValueError)


class TestPayload:
    def test_base_defaults(self):
        exc = FlymapException("boom")
        assert str(exc) == "boom"
        assert exc.code is None
        assert exc.context == {}

    def test_field_not_found_context(self):
        exc = FieldNotFoundException("age", Sample)
        assert str(exc) == "No field 'age' on Sample"
        assert exc.code == "FIELD_NOT_FOUND"
        assert exc.field_name == "age"
        assert exc.owner is Sample
        assert exc.context == {"field": "age", "owner": "Sample"}

    def test_access_denied_with_reason(self):
        exc = FieldAccessDeniedException("age", Sample, "frozen")
        assert str(exc) == "Cannot access field 'age' on Sample: frozen"
        assert exc.code == "FIELD_ACCESS_DENIED"

    def test_invalid_argument_code(self):
        exc = InvalidArgumentException("missing", context={"arg": "existing"})
        assert exc.code == "INVALID_ARGUMENT"
        assert exc.context == {"arg": "existing"}
