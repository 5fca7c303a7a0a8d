"""Users app package.

Defines the platform user model with its roles (customer, staff, admin),
the authentication endpoints and the back-office user listing. Use
``apps.users.models.User`` as the AUTH_USER_MODEL throughout the project.
"""
