from django.db import DatabaseError
from django.http import Http404, HttpResponseBadRequest
from django.shortcuts import get_object_or_404, redirect, render
from django.views import View
from django.views.decorators.http import require_POST
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
import logging
from .forms import BlogPostForm, VillaEditorState
from .listing import RecordListing
from .location import PRESET_LOCATIONS
from .models import BlogPost, Villa
from .serializers import BlogPostSerializer, DashboardStatsSerializer, VillaSerializer
from .utils import describe_store_error, get_dashboard_stats, is_missing_table, toast_error, toast_success

logger = logging.getLogger(__name__)


def blog_listing():
    return RecordListing(
        BlogPost,
        missing_message='Blog posts table does not exist. Please run migration.',
        label='blog posts',
    )


def villa_listing():
    return RecordListing(
        Villa,
        missing_message='Villas table does not exist. Please run migration.',
        label='villas',
    )


def dashboard_home(request):
    """
    Dashboard home with cached headline statistics
    """
    force_refresh = request.GET.get('refresh') == 'true'
    try:
        stats = get_dashboard_stats(force_refresh=force_refresh)
        error = None
    except DatabaseError as e:
        logger.error(f"Failed to load dashboard stats: {e}")
        stats = None
        error = describe_store_error(e, 'loading dashboard stats')
    return render(request, 'dashboard/home.html', {'stats': stats, 'error': error})


# ----------------------- Blog -----------------------
def blog_list(request):
    listing = blog_listing()
    listing.load()
    return render(request, 'dashboard/blog_list.html', {'listing': listing})


@require_POST
def blog_toggle_publish(request, pk):
    """
    Toggle the publish flag of one post

    On a failed write the list is rendered from the already flipped rows,
    so the new status stays visible next to the failure alert.
    """
    listing = blog_listing()
    if not listing.load():
        return render(request, 'dashboard/blog_list.html', {'listing': listing})
    try:
        updated = listing.toggle_publish(pk)
    except BlogPost.DoesNotExist:
        raise Http404("Blog post not found")
    if updated:
        return redirect('dashboard:blog_list')
    toast_error(request, 'Update Failed', listing.alert)
    return render(request, 'dashboard/blog_list.html', {'listing': listing})


class RecordDeleteView(View):
    """
    Confirmation page on GET, delete on POST
    """
    listing_factory = None
    list_url = None
    list_template = None
    title_field = 'title'

    def get_record(self, listing, pk):
        record = listing.get(pk)
        if record is None:
            raise Http404("Record not found")
        return record

    def get(self, request, pk):
        listing = self.listing_factory()
        if not listing.load():
            return render(request, self.list_template, {'listing': listing})
        record = self.get_record(listing, pk)
        return render(request, 'dashboard/confirm_delete.html', {
            'record': record,
            'title': getattr(record, self.title_field),
            'cancel_url': self.list_url,
        })

    def post(self, request, pk):
        listing = self.listing_factory()
        if not listing.load():
            return render(request, self.list_template, {'listing': listing})
        record = self.get_record(listing, pk)
        if listing.delete(pk):
            toast_success(request, 'Deleted', f'"{getattr(record, self.title_field)}" has been deleted')
            return redirect(self.list_url)
        toast_error(request, 'Delete Failed', listing.alert)
        return render(request, self.list_template, {'listing': listing})


class BlogPostDeleteView(RecordDeleteView):
    listing_factory = staticmethod(blog_listing)
    list_url = 'dashboard:blog_list'
    list_template = 'dashboard/blog_list.html'


class BlogPostFormView(View):
    """
    Create a post, or edit one when the URL carries a pk
    """
    template_name = 'dashboard/blog_form.html'

    def get_post(self):
        pk = self.kwargs.get('pk')
        return get_object_or_404(BlogPost, pk=pk) if pk else None

    def get(self, request, pk=None):
        post = self.get_post()
        return render(request, self.template_name, {'form': BlogPostForm(instance=post), 'post': post})

    def post(self, request, pk=None):
        post = self.get_post()
        form = BlogPostForm(request.POST, instance=post)
        if not form.is_valid():
            return render(request, self.template_name, {'form': form, 'post': post})

        action = 'updating post' if post else 'creating post'
        try:
            saved = form.save()
        except DatabaseError as e:
            logger.error(f"Failed {action}: {e}")
            error = describe_store_error(e, action)
            return render(request, self.template_name, {'form': form, 'post': post, 'error': error})

        logger.info(f"Saved blog post {saved.pk} ({saved.slug})")
        toast_success(request, 'Post Saved', f'"{saved.title}" has been saved')
        return redirect('dashboard:blog_list')


# ----------------------- Villas -----------------------
def villa_list(request):
    listing = villa_listing()
    listing.load()
    return render(request, 'dashboard/villa_list.html', {'listing': listing})


class VillaDeleteView(RecordDeleteView):
    listing_factory = staticmethod(villa_listing)
    list_url = 'dashboard:villa_list'
    list_template = 'dashboard/villa_list.html'
    title_field = 'name'


class VillaFormView(View):
    """
    Create a villa, or edit one when the URL carries a pk

    Every button posts the whole form with an ``action``; anything other
    than ``save`` is an editor action and re-renders the page.
    """
    template_name = 'dashboard/villa_form.html'

    def get_villa(self):
        pk = self.kwargs.get('pk')
        return get_object_or_404(Villa, pk=pk) if pk else None

    def render_state(self, request, state, villa, form=None, error=None):
        return render(request, self.template_name, {
            'state': state,
            'form': form,
            'villa': villa,
            'error': error,
            'presets': PRESET_LOCATIONS,
        })

    def get(self, request, pk=None):
        villa = self.get_villa()
        state = VillaEditorState.from_instance(villa) if villa else VillaEditorState()
        return self.render_state(request, state, villa)

    def post(self, request, pk=None):
        villa = self.get_villa()
        state = VillaEditorState.from_post(request.POST)
        action = request.POST.get('action') or 'save'

        if action != 'save':
            try:
                state.dispatch(action)
            except (KeyError, IndexError, ValueError) as e:
                logger.warning(f"Rejected villa editor action {action!r}: {e}")
                return HttpResponseBadRequest(f"Invalid action: {action}")
            return self.render_state(request, state, villa)

        form = state.form()
        if not form.is_valid():
            return self.render_state(request, state, villa, form=form)

        payload = state.payload()
        verb = 'updating villa' if villa else 'creating villa'
        try:
            if villa is None:
                saved = Villa.objects.create(**payload)
            else:
                for attr, value in payload.items():
                    setattr(villa, attr, value)
                villa.save()
                saved = villa
        except DatabaseError as e:
            logger.error(f"Failed {verb}: {e}")
            error = describe_store_error(e, verb)
            toast_error(request, 'Update Failed' if villa else 'Creation Failed', error)
            return self.render_state(request, state, villa, form=form, error=error)

        if villa is None:
            toast_success(request, 'Villa Created', f'"{saved.name}" has been added successfully')
        else:
            toast_success(request, 'Villa Updated', f'"{saved.name}" has been saved')
        logger.info(f"Saved villa {saved.pk}")
        return redirect('dashboard:villa_list')


# ----------------------- JSON API -----------------------
class StoreErrorMixin:
    """
    Turn database failures into a JSON error instead of a server error
    """
    store_action = 'handling request'

    def handle_exception(self, exc):
        if isinstance(exc, DatabaseError):
            logger.error(f"API store error while {self.store_action}: {exc}")
            return Response(
                {
                    'detail': describe_store_error(exc, self.store_action),
                    'missing_table': is_missing_table(exc),
                },
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return super().handle_exception(exc)


class VillaListAPIView(StoreErrorMixin, generics.ListCreateAPIView):
    serializer_class = VillaSerializer
    permission_classes = [permissions.AllowAny]
    store_action = 'handling villas'

    def get_queryset(self):
        return Villa.objects.order_by('-created_at')


class BlogPostListAPIView(StoreErrorMixin, generics.ListCreateAPIView):
    serializer_class = BlogPostSerializer
    permission_classes = [permissions.AllowAny]
    store_action = 'handling blog posts'

    def get_queryset(self):
        return BlogPost.objects.order_by('-created_at')


class DashboardStatsView(StoreErrorMixin, APIView):
    permission_classes = [permissions.AllowAny]
    store_action = 'loading dashboard stats'

    def get(self, request):
        """Get cached dashboard statistics"""
        stats = get_dashboard_stats(force_refresh=request.GET.get('refresh') == 'true')
        return Response(DashboardStatsSerializer(stats).data)
