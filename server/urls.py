"""Main URL mapping configuration file.

Only the Django admin is exposed: the file browser itself lives
outside this project and calls the ``logic`` modules directly.
"""

from django.contrib import admin
from django.urls import path

urlpatterns = [
    path('admin/', admin.site.urls),
]
