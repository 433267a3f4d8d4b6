"""
Copyright 2011-2013 Gregory Holt

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
import hashlib
import io
import unittest
from uuid import uuid4

from swiftstore.exceptions import ContainerNotEmpty, NotFound
from swiftstore.storage.acl import ACL
from swiftstore.test.functional import new_client


class TestAccount(unittest.TestCase):

    def setUp(self):
        self.client = new_client()

    def test_account_info(self):
        info = self.client.account_info()
        self.assertTrue(info.bytes >= 0)
        self.assertTrue(info.containers >= 0)
        self.assertTrue(info.objects >= 0)

    def test_list_containers(self):
        name = 'swiftstore_test_' + uuid4().hex
        try:
            self.assertTrue(self.client.create_container(name))
            containers = self.client.list_containers()
            self.assertTrue(name in containers)
            self.assertTrue(self.client.account_info().containers > 0)
        finally:
            self.client.delete_container(name)


class TestContainer(unittest.TestCase):

    def setUp(self):
        self.client = new_client()
        self.container = 'swiftstore_test_' + uuid4().hex
        self.assertTrue(self.client.create_container(self.container))

    def tearDown(self):
        for name in self.client.list_objects(self.container):
            self.client.delete_object(self.container, name)
        self.client.delete_container(self.container)

    def test_create_again(self):
        self.assertFalse(self.client.create_container(self.container))

    def test_get(self):
        container = self.client.get_container(self.container)
        self.assertEqual(container.name, self.container)
        self.assertEqual(container.count, 0)
        self.assertTrue(container.acl.is_non_public())

    def test_missing(self):
        name = self.container + '_missing'
        self.assertRaises(NotFound, self.client.get_container, name)
        self.assertFalse(self.client.container_exists(name))
        self.assertFalse(self.client.delete_container(name))

    def test_acl_and_metadata(self):
        self.client.update_container(
            self.container, ACL.make_public(), {'Swiftstore-Test': '123'})
        container = self.client.get_container(self.container)
        self.assertTrue(container.acl.is_public())
        self.assertEqual(
            container.metadata.get('Swiftstore-Test'), '123')
        self.client.change_container_acl(
            self.container, ACL.make_non_public())
        self.assertTrue(
            self.client.get_container(self.container).acl.is_non_public())

    def test_delete_not_empty(self):
        self.client.put_object(self.container, 'object1', b'testvalue')
        self.assertRaises(
            ContainerNotEmpty, self.client.delete_container, self.container)


class TestObject(unittest.TestCase):

    def setUp(self):
        self.client = new_client()
        self.container = 'swiftstore_test_' + uuid4().hex
        self.assertTrue(self.client.create_container(self.container))

    def tearDown(self):
        for name in self.client.list_objects(self.container):
            self.client.delete_object(self.container, name)
        self.client.delete_container(self.container)

    def test_put_get(self):
        stored = self.client.put_object(
            self.container, 'dir/object1', b'testvalue',
            content_type='text/plain', metadata={'Swiftstore-Test': 'x'})
        self.assertEqual(stored.etag, hashlib.md5(b'testvalue').hexdigest())
        obj = self.client.get_object(self.container, 'dir/object1')
        self.assertEqual(obj.content, b'testvalue')
        self.assertEqual(obj.metadata.get('Swiftstore-Test'), 'x')
        listing = self.client.list_objects(self.container, prefix='dir/')
        self.assertEqual(list(listing), ['dir/object1'])

    def test_stream(self):
        self.client.put_object(
            self.container, 'object2', io.BytesIO(b'0123456789' * 1000))
        info = self.client.get_object_info(self.container, 'object2')
        self.assertEqual(info.size, 10000)

    def test_delete(self):
        self.client.put_object(self.container, 'object3', b'x')
        self.assertTrue(self.client.delete_object(self.container, 'object3'))
        self.assertFalse(self.client.delete_object(self.container, 'object3'))
        self.assertFalse(self.client.object_exists(self.container, 'object3'))


if __name__ == '__main__':
    unittest.main()
