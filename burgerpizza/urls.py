# burgerpizza/urls.py
"""
Configuração principal de URL do projeto BurgerPizza.

Este arquivo centraliza o roteamento, incluindo:
1. Rotas da API (burgerpizza.presentation)
2. Rotas do Admin (Django Admin), em /django-admin/ porque /admin/ pertence à API
3. Rotas da Documentação da API (Swagger/Redoc)
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView


urlpatterns = [
    # API REST consumida pelos frontends da loja e do painel
    path('', include('burgerpizza.presentation.urls')),

    # URL para o painel de administração padrão do Django
    path('django-admin/', admin.site.urls),

    # ====================================================================
    # ROTAS DE DOCUMENTAÇÃO DA API (DRF SPECTACULAR)
    # ====================================================================
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/swagger/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/docs/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]

# Imagens do cardápio em desenvolvimento
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
