"""
Contains the storage client and the resource model it returns.

For convenience, the following names are imported from submodules:

=================  ========================================================
StorageClient      :py:class:`swiftstore.storage.client.StorageClient`
ACL                :py:class:`swiftstore.storage.acl.ACL`
Container          :py:class:`swiftstore.storage.container.Container`
StorageObject      :py:class:`swiftstore.storage.storageobject.StorageObject`
AccountInfo        :py:class:`swiftstore.storage.account.AccountInfo`
Credentials        :py:class:`swiftstore.storage.account.Credentials`
=================  ========================================================

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
# flake8: noqa
from swiftstore.storage.acl import ACL
from swiftstore.storage.account import AccountInfo, Credentials
from swiftstore.storage.container import Container
from swiftstore.storage.storageobject import StorageObject
from swiftstore.storage.client import StorageClient
