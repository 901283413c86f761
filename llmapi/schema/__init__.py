"""A small JSON schema model and a validator for it."""