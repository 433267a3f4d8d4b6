"""
Contains the ACL value object for container access control.
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


class ACL(object):
    """
    The access control list of a container, as carried by the
    X-Container-Read and X-Container-Write headers.

    An ACL is an ordered list of rules, each granting READ, WRITE, or
    READ_WRITE to one of:

    =========================== =================================
    account                     Every user of an account
                                (``account``).
    account and user            One user of an account
                                (``account:user``).
    referrer                    Requests whose Referer matches the
                                host (``.r:host``); READ only. A
                                leading ``-`` on the host denies
                                instead (``.r:-host``).
    listings                    Anyone allowed to read may also list
                                the container (``.rlistings``).
    =========================== =================================

    The owner of the account can always read and write, so an empty
    ACL is a private container. Use :py:func:`make_public` and
    :py:func:`make_non_public` for the two usual cases.
    """

    READ = 1
    WRITE = 2
    READ_WRITE = 3

    HEADER_READ = 'X-Container-Read'
    HEADER_WRITE = 'X-Container-Write'

    def __init__(self, rules=None):
        self.rules = [dict(r) for r in rules or []]

    @classmethod
    def make_public(cls):
        """
        Returns an ACL granting anonymous read and listing; writes are
        still limited to the owner.
        """
        acl = cls()
        acl.add_referrer(cls.READ, '*')
        acl.allow_listings()
        return acl

    @classmethod
    def make_non_public(cls):
        """
        Returns an ACL limiting reads and writes to the owner.
        Sending it clears any grants the container had.
        """
        return cls()

    @classmethod
    def from_headers(cls, headers):
        """
        Returns the ACL described by the X-Container-Read and
        X-Container-Write headers of the dict given; header names are
        matched case insensitively.
        """
        lowered = dict((k.lower(), v) for k, v in (headers or {}).items())
        acl = cls()
        for header, mask in ((cls.HEADER_READ, cls.READ),
                             (cls.HEADER_WRITE, cls.WRITE)):
            value = lowered.get(header.lower())
            if isinstance(value, list):
                value = ','.join(value)
            for item in (value or '').split(','):
                item = item.strip()
                if item:
                    acl.rules.append(cls.parse_rule(mask, item))
        return acl

    @staticmethod
    def parse_rule(mask, item):
        """
        Returns the rule dict for one comma separated item of an ACL
        header.
        """
        if item == '.rlistings':
            return {'mask': mask, 'rlistings': True}
        if item.startswith('.r:'):
            return {'mask': mask, 'host': item[3:]}
        if ':' in item:
            account, user = item.split(':', 1)
            return {'mask': mask, 'account': account, 'user': user}
        return {'mask': mask, 'account': item}

    @staticmethod
    def rule_to_string(rule):
        if rule.get('rlistings'):
            return '.rlistings'
        if 'host' in rule:
            return '.r:' + rule['host']
        if rule.get('user'):
            return '%s:%s' % (rule['account'], rule['user'])
        return rule['account']

    def add_account(self, perm, account, user=None):
        """
        Grants READ, WRITE, or READ_WRITE to an account, or to one
        user of that account if a user is given.
        """
        rule = {'mask': perm, 'account': account}
        if user:
            rule['user'] = user
        self.rules.append(rule)
        return self

    def add_referrer(self, perm=READ, host='*'):
        """
        Grants READ to requests with a Referer matching the host.
        Prefix the host with ``-`` to deny such requests instead.
        """
        if perm & self.WRITE:
            raise ValueError('Referrer rules can only grant READ.')
        self.rules.append({'mask': perm, 'host': host})
        return self

    def allow_listings(self):
        """
        Lets anyone allowed to read also list the container.
        """
        self.rules.append({'mask': self.READ, 'rlistings': True})
        return self

    def headers(self):
        """
        Returns the dict of X-Container-Read and X-Container-Write
        headers for this ACL. A header with no rules has an empty
        value, which removes any previous grant.
        """
        read = []
        write = []
        for rule in self.rules:
            item = self.rule_to_string(rule)
            if rule['mask'] & self.READ:
                read.append(item)
            if rule['mask'] & self.WRITE:
                write.append(item)
        return {self.HEADER_READ: ','.join(read),
                self.HEADER_WRITE: ','.join(write)}

    def is_public(self):
        """
        Returns True if anyone at all may read the container.
        """
        return any(
            rule['mask'] & self.READ and rule.get('host') == '*'
            for rule in self.rules)

    def is_non_public(self):
        """
        Returns True if no referrer at all is granted reads. Note
        that this is not simply ``not is_public()``; an ACL granting
        reads to one referrer host is neither.
        """
        return not any(
            rule['mask'] & self.READ and 'host' in rule and
            not rule['host'].startswith('-')
            for rule in self.rules)

    def __eq__(self, other):
        if not isinstance(other, ACL):
            return NotImplemented
        return self.rules == other.rules

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self):
        return 'ACL(%r)' % self.rules

    def __str__(self):
        headers = self.headers()
        return '%s: %s\n%s: %s' % (
            self.HEADER_READ, headers[self.HEADER_READ],
            self.HEADER_WRITE, headers[self.HEADER_WRITE])
