"""
``like`` lookup: a raw SQL ``LIKE`` match.

Unlike ``contains`` the pattern is passed through unescaped, so ``%`` and
``_`` act as wildcards, and matching is case-sensitive on every backend.
SQLite's ``LIKE`` ignores ASCII case, so there the pattern is rewritten to
the equivalent ``GLOB``.
"""
from django.db.models import CharField, Lookup, TextField


def like_to_glob(pattern: str) -> str:
    out = []
    for ch in pattern:
        if ch == '%':
            out.append('*')
        elif ch == '_':
            out.append('?')
        elif ch in '*?[':
            out.append(f'[{ch}]')
        else:
            out.append(ch)
    return ''.join(out)


@CharField.register_lookup
@TextField.register_lookup
class Like(Lookup):
    lookup_name = 'like'

    def as_sql(self, compiler, connection):
        lhs, lhs_params = self.process_lhs(compiler, connection)
        rhs, rhs_params = self.process_rhs(compiler, connection)
        return f'{lhs} LIKE {rhs}', [*lhs_params, *rhs_params]

    def as_sqlite(self, compiler, connection):
        lhs, lhs_params = self.process_lhs(compiler, connection)
        rhs, rhs_params = self.process_rhs(compiler, connection)
        if self.rhs_is_direct_value():
            rhs_params = [like_to_glob(p) for p in rhs_params]
        return f'{lhs} GLOB {rhs}', [*lhs_params, *rhs_params]
