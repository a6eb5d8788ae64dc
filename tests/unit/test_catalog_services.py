"""
Customer, product, contract and seed service tests.
"""

from unittest.mock import MagicMock

import pytest
import requests

from core.models import UploadedFile
from exceptions import ResourceNotFoundError, ValidationError
from services.contract_service import safe_file_name
from services.seed import SAMPLE_PRODUCTS, SeedService
from tests.factories.model_factories import make_customer, make_product


class TestCustomerService:

    def test_upsert_replaces_whole_record(self, services, fake_repos):
        services.customers.upsert_customer(make_customer(row_key="C1", phone="555-0000"))
        services.customers.upsert_customer({"rowKey": "C1", "fullName": "Renamed"})

        stored = fake_repos['customer_repo'].get_customer("C1")
        assert stored.full_name == "Renamed"
        assert stored.phone == ""

    def test_list_sorted_by_name(self, services):
        for name in ["zed", "Amy", "bob"]:
            services.customers.upsert_customer(make_customer(fullName=name))
        assert [c.full_name for c in services.customers.list_customers()] == ["Amy", "bob", "zed"]

    def test_get_missing(self, services):
        with pytest.raises(ResourceNotFoundError):
            services.customers.get_customer("missing")

    def test_delete(self, services, fake_repos):
        services.customers.upsert_customer(make_customer(row_key="C1"))
        services.customers.delete_customer("C1")
        services.customers.delete_customer("C1")
        assert fake_repos['customer_repo'].get_customer("C1") is None


class TestProductService:

    def test_search_is_case_insensitive_substring(self, services):
        services.products.upsert_product(make_product(name="Wool Scarf"))
        services.products.upsert_product(make_product(name="Leather Boots"))

        assert [p.name for p in services.products.list_products("SCARF")] == ["Wool Scarf"]
        assert len(services.products.list_products("  ")) == 2
        assert services.products.list_products("hat") == []

    def test_upload_image_names_blob_with_uuid(self, services, fake_repos):
        url = services.products.upload_image("hat.png", b"\x89PNG", "image/png")

        blob_name = fake_repos['blob_repo'].blob_name_from_url("productimages", url)
        assert blob_name.endswith("_hat.png")
        assert fake_repos['blob_repo'].blobs[f"productimages/{blob_name}"]["content_type"] == "image/png"

    def test_upload_empty_image_rejected(self, services):
        with pytest.raises(ValidationError):
            services.products.upload_image("hat.png", b"")

    def test_delete_removes_owned_image(self, services, fake_repos):
        url = services.products.upload_image("hat.png", b"data")
        services.products.upsert_product(make_product(row_key="P1", imageUrl=url))

        services.products.delete_product("P1")

        assert fake_repos['blob_repo'].blobs == {}
        assert fake_repos['product_repo'].get_product("P1") is None

    def test_delete_leaves_external_image_alone(self, services, fake_repos):
        own = services.products.upload_image("keep.png", b"data")
        services.products.upsert_product(make_product(row_key="P1", imageUrl="https://picsum.photos/x.jpg"))

        services.products.delete_product("P1")

        assert fake_repos['blob_repo'].blob_name_from_url("productimages", own) is not None
        assert len(fake_repos['blob_repo'].blobs) == 1

    def test_delete_unknown_is_noop(self, services):
        services.products.delete_product("missing")


class TestContractService:

    def test_upload_prefixes_names(self, services, fake_repos):
        stored = services.contracts.upload([
            UploadedFile(filename="a.pdf", content=b"one"),
            UploadedFile(filename="scans\\b.pdf", content=b"two"),
        ])

        assert [name.split("_", 1)[1] for name in stored] == ["a.pdf", "b.pdf"]
        assert sorted(f.name for f in services.contracts.list_contracts()) == sorted(stored)

    def test_upload_requires_files(self, services):
        with pytest.raises(ValidationError):
            services.contracts.upload([])

    def test_download_and_delete(self, services):
        name = services.contracts.upload([UploadedFile(filename="a.pdf", content=b"pdf")])[0]

        assert services.contracts.download(name) == b"pdf"
        assert services.contracts.delete(name) is True
        assert services.contracts.delete(name) is False
        with pytest.raises(ResourceNotFoundError):
            services.contracts.download(name)

    @pytest.mark.parametrize("raw,expected", [
        ("contract.pdf", "contract.pdf"),
        ("a/b/c.pdf", "c.pdf"),
        ("C:\\docs\\d.pdf", "d.pdf"),
        ("", "upload.bin"),
        ("folder/", "upload.bin"),
    ])
    def test_safe_file_name(self, raw, expected):
        assert safe_file_name(raw) == expected


class TestSeedService:

    def _seeder(self, fake_repos, **kwargs):
        return SeedService(fake_repos['product_repo'], fake_repos['blob_repo'], "productimages", **kwargs)

    def test_seeds_empty_table(self, fake_repos):
        inserted = self._seeder(fake_repos).seed_products()

        assert inserted == len(SAMPLE_PRODUCTS)
        names = {p.name for p in fake_repos['product_repo'].list_products()}
        assert names == {sample[0] for sample in SAMPLE_PRODUCTS}

    def test_skips_populated_table(self, services, fake_repos):
        services.products.upsert_product(make_product())
        assert self._seeder(fake_repos).seed_products() == 0
        assert len(fake_repos['product_repo'].list_products()) == 1

    def test_force_seeds_anyway(self, services, fake_repos):
        services.products.upsert_product(make_product())
        assert self._seeder(fake_repos).seed_products(force=True) == len(SAMPLE_PRODUCTS)

    def test_rehosts_images(self, fake_repos):
        response = MagicMock()
        response.content = b"jpeg-bytes"
        response.headers = {"Content-Type": "image/jpeg"}
        session = MagicMock()
        session.get.return_value = response

        self._seeder(fake_repos, download_images=True, session=session).seed_products()

        assert session.get.call_count == len(SAMPLE_PRODUCTS)
        assert len(fake_repos['blob_repo'].blobs) == len(SAMPLE_PRODUCTS)
        for product in fake_repos['product_repo'].list_products():
            assert fake_repos['blob_repo'].blob_name_from_url("productimages", product.image_url)

    def test_download_failure_propagates(self, fake_repos):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ConnectionError("offline")

        with pytest.raises(requests.exceptions.ConnectionError):
            self._seeder(fake_repos, download_images=True, session=session).seed_products()
