from unittest import TestCase
from unittest.mock import MagicMock, patch

from bson import ObjectId

from ultmt.models.user import UserModel
from ultmt.repositories.common.mongo_repository import to_object_id
from ultmt.repositories.user_repository import UserRepository
from ultmt.tests.fixtures.user import make_user


class ToObjectIdTests(TestCase):
    def test_conversions(self):
        object_id = ObjectId()

        self.assertIs(to_object_id(object_id), object_id)
        self.assertEqual(to_object_id(str(object_id)), object_id)
        for value in [None, "", "not-an-id", 12345]:
            with self.subTest(value=value):
                self.assertIsNone(to_object_id(value))


class MongoRepositoryTests(TestCase):
    def setUp(self) -> None:
        self.user = make_user()
        self.mock_collection = MagicMock()
        self.mock_db_manager = MagicMock()
        self.mock_db_manager.get_collection.return_value = self.mock_collection
        patcher = patch("ultmt.repositories.common.mongo_repository.DatabaseManager", return_value=self.mock_db_manager)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_get_by_id_success(self):
        self.mock_collection.find_one.return_value = self.user.to_document()

        result = UserRepository.get_by_id(str(self.user.id))

        self.mock_db_manager.get_collection.assert_called_with("users")
        self.mock_collection.find_one.assert_called_once_with({"_id": self.user.id})
        self.assertIsInstance(result, UserModel)
        self.assertEqual(result.username, "jrivera")

    def test_get_by_id_invalid_id_skips_database(self):
        self.assertIsNone(UserRepository.get_by_id("not-an-id"))
        self.mock_collection.find_one.assert_not_called()

    def test_get_by_id_not_found(self):
        self.mock_collection.find_one.return_value = None

        self.assertIsNone(UserRepository.get_by_id(str(ObjectId())))

    def test_get_by_ids_drops_invalid_ids(self):
        self.mock_collection.find.return_value = [self.user.to_document()]

        result = UserRepository.get_by_ids([str(self.user.id), "bad"])

        self.mock_collection.find.assert_called_once_with({"_id": {"$in": [self.user.id]}})
        self.assertEqual([user.id for user in result], [self.user.id])
        self.assertEqual(UserRepository.get_by_ids(["bad"]), [])

    def test_create_keeps_password_hash(self):
        UserRepository.create(self.user)

        document = self.mock_collection.insert_one.call_args[0][0]
        self.assertEqual(document["_id"], self.user.id)
        self.assertEqual(document["password"], self.user.password)

    def test_save_upserts_whole_document(self):
        UserRepository.save(self.user)

        query, document = self.mock_collection.replace_one.call_args[0]
        self.assertEqual(query, {"_id": self.user.id})
        self.assertEqual(document["username"], "jrivera")
        self.assertTrue(self.mock_collection.replace_one.call_args.kwargs["upsert"])

    def test_delete_by_id(self):
        self.mock_collection.delete_one.return_value.deleted_count = 1

        self.assertTrue(UserRepository.delete_by_id(self.user.id))
        self.assertFalse(UserRepository.delete_by_id("bad"))
        self.mock_collection.delete_one.assert_called_once_with({"_id": self.user.id})

    def test_update_many_returns_modified_count(self):
        self.mock_collection.update_many.return_value.modified_count = 3

        self.assertEqual(UserRepository.update_many({"guest": True}, {"$set": {"private": True}}), 3)
