# config/urls.py

from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # Aplicações principais
    path('', include('apps.core.urls')),
    path('board/', include('apps.board.urls')),

    path('dashboard/', RedirectView.as_view(pattern_name='core:painel', permanent=False)),
]

admin.site.site_header = 'Trilha Board Admin'
admin.site.site_title = 'Trilha Board'
admin.site.index_title = 'Administração do Sistema'
