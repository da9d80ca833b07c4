from django.contrib import admin

from turbo_streams.boards import models


class CardInline(admin.TabularInline):
    model = models.Card
    extra = 0


@admin.register(models.Board)
class BoardAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "owner", "created_at"]
    search_fields = ["name"]
    inlines = [CardInline]


@admin.register(models.Card)
class CardAdmin(admin.ModelAdmin):
    list_display = ["id", "title", "board", "status", "updated_at"]
    list_filter = ["status"]
    search_fields = ["title"]
