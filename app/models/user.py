from flask_login import UserMixin


class Caller(UserMixin):
    """The identity behind a request.

    Tenants are identified by the x-user-id header; admins by a signed bearer
    token. Either way the tenant id is the account uid.
    """

    def __init__(self, tenant_id, role='user', email=None, name=None, via='header'):
        self.id = tenant_id
        self.tenant_id = tenant_id
        self.role = role or 'user'
        self.email = email
        self.name = name
        self.via = via

    @classmethod
    def from_account(cls, tenant_id, account, via='header'):
        account = account or {}
        return cls(
            tenant_id,
            role=account.get('role', 'user'),
            email=account.get('email'),
            name=account.get('name'),
            via=via,
        )

    @property
    def is_admin(self):
        return self.role == 'admin'

    @property
    def has_token(self):
        return self.via == 'token'

    def __repr__(self):
        return f'<Caller {self.tenant_id} ({self.role}, via {self.via})>'
