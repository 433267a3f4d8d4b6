"""
Contains the per-operation tables deciding what each HTTP status code
means.

Swift gives the same status code different meanings depending on the
request; a 404 is an error when fetching a container but merely an
alternate outcome when deleting one, and a 202 on a container PUT
means the container already existed. Each operation therefore has
its own :py:class:`StatusTable` mapping status codes to an outcome
tag or an error class. Any code not in an operation's table is
unexpected.
"""
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
from swiftstore.exceptions import AuthorizationError, ContainerNotEmpty, \
    LengthRequired, NotFound, ServerError, StorageError, \
    UnexpectedStatus, UnprocessableEntity


#: The resource was created.
CREATED = 'created'
#: The resource already existed; any headers sent were still applied.
ALREADY_EXISTS = 'already_exists'
#: The resource exists and the response describes it.
FOUND = 'found'
#: The resource was deleted.
DELETED = 'deleted'
#: The resource did not exist to begin with.
ABSENT = 'absent'
#: The response body is a listing.
LISTED = 'listed'
#: The listing has no entries and there may be no body at all.
EMPTY = 'empty'
#: The change was accepted.
ACCEPTED = 'accepted'
#: The credentials were exchanged for a token.
AUTHENTICATED = 'authenticated'


class StatusTable(object):
    """
    Maps the status codes for one operation to outcomes.

    :param operation: The name of the operation, used in error
        messages (example: ``'delete container'``).
    :param mapping: A dict of int status code to either an outcome
        tag (a str) or a
        :py:class:`swiftstore.exceptions.StatusError` subclass to
        raise.
    """

    def __init__(self, operation, mapping):
        self.operation = operation
        self.mapping = dict(mapping)

    def __repr__(self):
        return 'StatusTable(%r)' % self.operation

    def outcome(self, status):
        """
        Returns the outcome tag or error class for the status; the
        error class for unlisted codes is
        :py:class:`swiftstore.exceptions.ServerError` for 5xx codes
        and :py:class:`swiftstore.exceptions.UnexpectedStatus`
        otherwise.
        """
        outcome = self.mapping.get(status)
        if outcome is not None:
            return outcome
        if status // 100 == 5:
            return ServerError
        return UnexpectedStatus

    def resolve(self, response):
        """
        Returns the outcome tag for the response's status or raises
        the error the table calls for.
        """
        outcome = self.outcome(response.status)
        if isinstance(outcome, type) and issubclass(outcome, StorageError):
            raise outcome(
                response.status, response.reason, method=response.method,
                url=response.url, operation=self.operation)
        return outcome


CREATE_CONTAINER = StatusTable('create container', {
    201: CREATED,
    202: ALREADY_EXISTS})

FETCH_CONTAINER = StatusTable('fetch container', {
    204: FOUND,
    404: NotFound})

DELETE_CONTAINER = StatusTable('delete container', {
    204: DELETED,
    404: ABSENT,
    409: ContainerNotEmpty})

LIST_CONTAINERS = StatusTable('list containers', {
    200: LISTED,
    204: EMPTY,
    401: AuthorizationError})

ACCOUNT_INFO = StatusTable('account info', {
    200: FOUND,
    204: FOUND,
    401: AuthorizationError})

LIST_OBJECTS = StatusTable('list objects', {
    200: LISTED,
    204: EMPTY,
    401: AuthorizationError,
    404: NotFound})

FETCH_OBJECT = StatusTable('fetch object', {
    200: FOUND,
    404: NotFound})

CREATE_OBJECT = StatusTable('create object', {
    201: CREATED,
    404: NotFound,
    411: LengthRequired,
    422: UnprocessableEntity})

UPDATE_OBJECT = StatusTable('update object', {
    202: ACCEPTED,
    404: NotFound})

DELETE_OBJECT = StatusTable('delete object', {
    204: DELETED,
    404: ABSENT})

SWIFT_AUTH = StatusTable('swift auth', {
    200: AUTHENTICATED,
    204: AUTHENTICATED,
    401: AuthorizationError,
    403: AuthorizationError,
    404: NotFound})
