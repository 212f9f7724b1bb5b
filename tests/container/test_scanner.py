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
"""Tests for mapper-bean scanning."""

import pytest

from flymap.container import MapperBeanRegistry, is_mapper_bean, mapper_bean, scan_package
from flymap.container.scanner import scan_module_classes
from flymap.kernel.exceptions import BeanRegistrationException


@mapper_bean
class LocalMapper:
    pass


class LocalSubclass(LocalMapper):
    pass


class TestMapperBeanDecorator:
    def test_marks_class(self):
        assert is_mapper_bean(LocalMapper)

    def test_subclasses_are_not_beans(self):
        assert not is_mapper_bean(LocalSubclass)

    def test_named_form_returns_class(self):
        @mapper_bean(name="custom")
        class Named:
            pass

        assert is_mapper_bean(Named)
        assert Named.__flymap_bean_name__ == "custom"


class TestScanPackage:
    def test_scan_registers_beans_in_all_submodules(self):
        registry = MapperBeanRegistry()

        found = scan_package("sample_mappers", registry)

        assert found == 3
        assert sorted(registry.names()) == ["CustomerMapper", "InvoiceMapper", "orders"]

    def test_reexported_classes_are_counted_once(self):
        registry = MapperBeanRegistry()
        scan_package("sample_mappers", registry)

        assert len(registry) == 3

    def test_scan_single_module(self):
        registry = MapperBeanRegistry()

        found = scan_package("sample_mappers.nested.invoices", registry)

        assert found == 1
        assert registry.contains("InvoiceMapper")

    def test_rescanning_is_harmless(self):
        registry = MapperBeanRegistry()
        scan_package("sample_mappers", registry)
        scan_package("sample_mappers", registry)

        assert len(registry) == 3

    def test_unknown_package_raises(self):
        with pytest.raises(BeanRegistrationException) as exc_info:
            scan_package("sample_mappers_missing", MapperBeanRegistry())
        assert exc_info.value.context["package"] == "sample_mappers_missing"

    def test_scan_module_classes_only_returns_local_beans(self):
        import sample_mappers as pkg

        assert scan_module_classes(pkg) == []

    def test_scanned_generic_mapper_bean_is_usable(self):
        from sample_mappers.nested.invoices import Invoice, InvoiceDTO

        registry = MapperBeanRegistry()
        scan_package("sample_mappers", registry)

        invoices = registry.get("InvoiceMapper")

        assert invoices.to_dto(Invoice(number="INV-1", total=10.0)) == InvoiceDTO(number="INV-1")
