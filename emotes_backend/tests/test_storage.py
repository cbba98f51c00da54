import unittest
from unittest.mock import MagicMock, patch

from emotes_backend.storage import (
    CosStorageClient,
    FirebaseStorageClient,
    InMemoryStorageClient,
)


class InMemoryStorageClientTests(unittest.TestCase):
    def test_url_round_trips_to_path(self):
        storage = InMemoryStorageClient(bucket="bucket-a")
        url = storage.upload_public("emotes/1_wave.png", b"data", content_type="image/png")
        self.assertEqual(url, "https://storage.example.test/bucket-a/emotes/1_wave.png")
        self.assertEqual(storage.path_from_url(url), "emotes/1_wave.png")

    def test_path_from_foreign_url_is_none(self):
        storage = InMemoryStorageClient(bucket="bucket-a")
        self.assertIsNone(storage.path_from_url("https://cdn.test/other/x.png"))
        self.assertIsNone(storage.path_from_url(""))

    def test_delete_missing_object_raises(self):
        storage = InMemoryStorageClient()
        with self.assertRaises(FileNotFoundError):
            storage.delete("emotes/missing.png")


class FirebaseStorageClientTests(unittest.TestCase):
    def setUp(self):
        self.bucket = MagicMock()
        self.bucket.name = "ruby.appspot.com"
        self.blob = MagicMock()
        self.blob.name = "emotes/1_wave.png"
        self.bucket.blob.return_value = self.blob
        self.storage = FirebaseStorageClient(bucket=self.bucket)

    def test_upload_makes_object_public(self):
        url = self.storage.upload_public("emotes/1_wave.png", b"data", content_type="image/png")

        self.bucket.blob.assert_called_once_with("emotes/1_wave.png")
        self.blob.upload_from_string.assert_called_once_with(b"data", content_type="image/png")
        self.blob.make_public.assert_called_once_with()
        self.assertEqual(
            url, "https://storage.googleapis.com/ruby.appspot.com/emotes/1_wave.png"
        )

    def test_path_from_url(self):
        url = "https://storage.googleapis.com/ruby.appspot.com/emotes/1_wave.png"
        self.assertEqual(self.storage.path_from_url(url), "emotes/1_wave.png")

    def test_delete(self):
        self.storage.delete("emotes/1_wave.png")
        self.bucket.blob.assert_called_once_with("emotes/1_wave.png")
        self.blob.delete.assert_called_once_with()


class CosStorageClientTests(unittest.TestCase):
    @patch("emotes_backend.storage.boto3.client")
    def test_upload_and_delete(self, mock_client_factory):
        s3 = MagicMock()
        mock_client_factory.return_value = s3
        storage = CosStorageClient(
            bucket="emotes-1250000000",
            region="ap-guangzhou",
            endpoint="https://cos.ap-guangzhou.myqcloud.com",
            access_key_id="id",
            secret_access_key="secret",
        )

        url = storage.upload_public("emotes/1_wave.png", b"data", content_type="image/png")
        s3.put_object.assert_called_once_with(
            Bucket="emotes-1250000000",
            Key="emotes/1_wave.png",
            Body=b"data",
            ContentType="image/png",
            ACL="public-read",
        )
        self.assertEqual(
            url,
            "https://emotes-1250000000.cos.ap-guangzhou.myqcloud.com/emotes/1_wave.png",
        )
        self.assertEqual(storage.path_from_url(url), "emotes/1_wave.png")

        storage.delete("emotes/1_wave.png")
        s3.delete_object.assert_called_once_with(
            Bucket="emotes-1250000000", Key="emotes/1_wave.png"
        )

    @patch("emotes_backend.storage.boto3.client")
    def test_public_base_url_is_used_verbatim(self, mock_client_factory):
        storage = CosStorageClient(
            bucket="emotes-1250000000",
            region="ap-guangzhou",
            endpoint="https://cos.ap-guangzhou.myqcloud.com",
            access_key_id="id",
            secret_access_key="secret",
            public_base_url="https://cdn.emotes.test/",
        )

        url = storage.public_url("emotes/1_wave.png")
        self.assertEqual(url, "https://cdn.emotes.test/emotes/1_wave.png")
        self.assertEqual(storage.path_from_url(url), "emotes/1_wave.png")
        self.assertIsNone(
            storage.path_from_url(
                "https://cos.ap-guangzhou.myqcloud.com/emotes-1250000000/emotes/1_wave.png"
            )
        )
        self.assertIsNone(storage.path_from_url("https://cdn.emotes.test/"))

    @patch("emotes_backend.storage.boto3.client")
    def test_default_aws_endpoint_uses_regional_virtual_host(self, mock_client_factory):
        storage = CosStorageClient(
            bucket="ruby-emotes",
            region="eu-west-1",
            endpoint="",
            access_key_id="id",
            secret_access_key="secret",
        )
        self.assertEqual(
            storage.public_url("emotes/1_wave.png"),
            "https://ruby-emotes.s3.eu-west-1.amazonaws.com/emotes/1_wave.png",
        )


if __name__ == "__main__":
    unittest.main()
