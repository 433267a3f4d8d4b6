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

from swiftstore.exceptions import AuthorizationError, ContainerNotEmpty, \
    NoResponseError, NotFound, UnprocessableEntity
from swiftstore.storage.acl import ACL
from swiftstore.storage.client import StorageClient
from swiftstore.transport.memorytransport import MemoryTransport


URL = 'memory://swift/v1/AUTH_test'


class TestMemoryAccount(unittest.TestCase):

    def setUp(self):
        self.transport = MemoryTransport(URL, token='tok')
        self.client = StorageClient('tok', URL, self.transport)

    def test_create_twice(self):
        self.assertTrue(self.client.create_container('photos') is True)
        self.assertTrue(self.client.create_container('photos') is False)
        self.assertTrue(self.client.container_exists('photos'))

    def test_missing_container(self):
        self.assertRaises(NotFound, self.client.get_container, 'nope')
        self.assertFalse(self.client.container_exists('nope'))
        self.assertRaises(NotFound, self.client.list_objects, 'nope')

    def test_delete(self):
        self.client.create_container('photos')
        self.client.put_object('photos', 'a.jpg', b'data')
        self.assertRaises(
            ContainerNotEmpty, self.client.delete_container, 'photos')
        self.assertTrue(self.client.delete_object('photos', 'a.jpg'))
        self.assertFalse(self.client.delete_object('photos', 'a.jpg'))
        self.assertTrue(self.client.delete_container('photos') is True)
        self.assertTrue(self.client.delete_container('photos') is False)

    def test_paging(self):
        names = ['c%d' % i for i in range(5)]
        for name in reversed(names):
            self.client.create_container(name)
        seen = []
        marker = None
        while True:
            page = self.client.list_containers(limit=2, marker=marker)
            if not page:
                break
            self.assertTrue(len(page) <= 2)
            seen.extend(page)
            marker = list(page)[-1]
        self.assertEqual(seen, names)

    def test_account_info(self):
        self.client.create_container('a')
        self.client.create_container('b')
        self.client.put_object('a', 'x', b'12345')
        self.client.put_object('b', 'y', b'123')
        info = self.client.account_info()
        self.assertEqual(info.bytes, 8)
        self.assertEqual(info.containers, 2)
        self.assertEqual(info.objects, 2)
        containers = self.client.list_containers()
        self.assertEqual(containers['a'].bytes, 5)
        self.assertEqual(containers['a'].count, 1)

    def test_acl_and_metadata(self):
        self.client.create_container(
            'photos', ACL.make_public(), {'Owner': 'jdoe'})
        container = self.client.get_container('photos')
        self.assertTrue(container.acl.is_public())
        self.assertEqual(container.metadata, {'Owner': 'jdoe'})
        self.assertFalse(
            self.client.change_container_acl('photos', ACL.make_non_public()))
        container = self.client.get_container('photos')
        self.assertTrue(container.acl.is_non_public())
        self.assertEqual(container.metadata, {'Owner': 'jdoe'})

    def test_metadata_round_trip(self):
        self.client.create_container('c', metadata={'Color': 'blue'})
        container = self.client.get_container('c')
        self.assertEqual(container.metadata, {'Color': 'blue'})
        self.client.put_object('c', 'o', b'x', metadata={'Shape': 'round'})
        self.assertEqual(
            self.client.get_object_info('c', 'o').metadata,
            {'Shape': 'round'})

    def test_fetched_acl_is_a_snapshot(self):
        self.client.create_container('private')
        container = self.client.get_container('private')
        container.acl.add_referrer(ACL.READ, '*')
        self.assertFalse(container.acl.is_public())

    def test_objects(self):
        self.client.create_container('docs')
        stored = self.client.put_object(
            'docs', 'dir/hello.txt', 'hello', content_type='text/plain',
            metadata={'Author': 'jdoe'})
        self.assertEqual(stored.etag, hashlib.md5(b'hello').hexdigest())
        self.client.put_object('docs', 'other', io.BytesIO(b'streamed'))
        listing = self.client.list_objects('docs', prefix='dir/')
        self.assertEqual(list(listing), ['dir/hello.txt'])
        self.assertEqual(listing['dir/hello.txt'].size, 5)
        obj = self.client.get_object('docs', 'dir/hello.txt')
        self.assertEqual(obj.content, b'hello')
        self.assertEqual(obj.content_type, 'text/plain')
        self.assertEqual(obj.metadata, {'Author': 'jdoe'})
        self.assertEqual(
            self.client.get_object('docs', 'other').content, b'streamed')
        self.assertTrue(self.client.update_object_metadata(
            'docs', 'dir/hello.txt', {'Color': 'red'}))
        info = self.client.get_object_info('docs', 'dir/hello.txt')
        self.assertEqual(info.metadata, {'Color': 'red'})
        self.assertTrue(info.content is None)
        self.assertFalse(self.client.object_exists('docs', 'missing'))

    def test_etag_mismatch(self):
        self.client.create_container('docs')
        self.assertRaises(
            UnprocessableEntity, self.client.put_object, 'docs', 'x',
            b'abc', etag='0' * 32)
        self.client.put_object(
            'docs', 'x', b'abc', etag=hashlib.md5(b'abc').hexdigest())

    def test_token_mismatch(self):
        client = StorageClient('wrong', URL, self.transport)
        response = self.transport.send(URL, 'HEAD', {'X-Auth-Token': 'bad'})
        self.assertEqual(response.status, 401)
        self.assertRaises(AuthorizationError, client.account_info)
        self.assertRaises(AuthorizationError, client.list_containers)

    def test_outside_account(self):
        self.assertRaises(
            NoResponseError, self.transport.send,
            'memory://swift/v1/AUTH_other', 'HEAD')

    def test_requests_recorded(self):
        self.client.create_container('photos')
        method, url, headers = self.transport.requests[-1]
        self.assertEqual(method, 'PUT')
        self.assertEqual(url, URL + '/photos')
        self.assertEqual(headers['X-Auth-Token'], 'tok')


class TestMemoryAuth(unittest.TestCase):

    def test_swift_auth(self):
        transport = MemoryTransport(URL, users={'test:tester': 'testing'})
        self.assertEqual(transport.auth_url, 'memory://swift/auth/v1.0')
        client = StorageClient.new_from_swift_auth(
            'test:tester', 'testing', transport.auth_url, transport)
        self.assertEqual(client.url, URL)
        self.assertEqual(client.token, transport.token)
        self.assertTrue(client.create_container('photos'))

    def test_swift_auth_refused(self):
        transport = MemoryTransport(URL, users={'test:tester': 'testing'})
        self.assertRaises(
            AuthorizationError, StorageClient.new_from_swift_auth,
            'test:tester', 'wrong', transport.auth_url, transport)


if __name__ == '__main__':
    unittest.main()
