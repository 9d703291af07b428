# apps/core/forms.py

"""
Formulários de validação de entrada

Não há HTML aqui: os formulários só validam e limpam (strip) os
dados JSON que chegam aos serviços.
"""

from django import forms
from django.core.exceptions import ValidationError

from .exceptions import ErroValidacao
from .models import STATUS_CHOICES


def validar_ou_falhar(form):
    """Retorna cleaned_data ou levanta ErroValidacao com o primeiro erro"""
    if form.is_valid():
        return form.cleaned_data

    primeiro_erro = next(iter(form.errors.values()))[0]
    raise ErroValidacao(primeiro_erro)


class TextoEstritoMixin:
    """
    Recusa valores que não sejam string

    CharField converteria 123 ou {} para texto silenciosamente.
    """

    campos_texto = ()
    mensagem_texto = 'Invalid field type'

    def clean(self):
        cleaned_data = super().clean()
        for campo in self.campos_texto:
            if campo in self.data and not isinstance(self.data[campo], str):
                raise ValidationError(f"{campo} {self.mensagem_texto.lower()}")
        return cleaned_data


class CredenciaisForm(TextoEstritoMixin, forms.Form):
    """Usado tanto no registro quanto no login"""

    campos_texto = ('username', 'password')
    mensagem_texto = 'must be a string'

    username = forms.CharField(
        max_length=150,
        error_messages={'required': 'Username and password required'}
    )

    # Senha nunca é alterada, nem por strip
    password = forms.CharField(
        strip=False,
        error_messages={'required': 'Username and password required'}
    )


class BoardForm(TextoEstritoMixin, forms.Form):
    """Criação e renomeação de board"""

    campos_texto = ('name',)
    mensagem_texto = 'must be a string'

    name = forms.CharField(
        max_length=200,
        error_messages={
            'required': 'Board name is required',
            'max_length': 'Board name must have at most 200 characters',
        }
    )


class TarefaForm(TextoEstritoMixin, forms.Form):
    """Criação de tarefa"""

    campos_texto = ('title', 'description')
    mensagem_texto = 'must be a string'

    title = forms.CharField(
        max_length=200,
        error_messages={
            'required': 'Task title is required',
            'max_length': 'Task title must have at most 200 characters',
        }
    )
    description = forms.CharField(required=False)


class AtualizarTarefaForm(TextoEstritoMixin, forms.Form):
    """
    Atualização parcial de tarefa

    Todos os campos são opcionais; o que importa é se a chave veio no
    patch (ver campos_presentes). Título presente não pode ficar vazio.
    """

    campos_texto = ('title', 'description', 'status')
    mensagem_texto = 'must be a string'

    title = forms.CharField(
        required=False,
        max_length=200,
        error_messages={'max_length': 'Task title must have at most 200 characters'}
    )
    description = forms.CharField(required=False)
    status = forms.ChoiceField(
        required=False,
        choices=STATUS_CHOICES,
        error_messages={'invalid_choice': 'Status must be Pending or Completed'}
    )

    def campos_presentes(self):
        return [nome for nome in self.fields if nome in self.data]

    def clean_title(self):
        title = self.cleaned_data.get('title')
        if 'title' in self.data and not title:
            raise ValidationError('Task title is required')
        return title

    def clean_status(self):
        status = self.cleaned_data.get('status')
        if 'status' in self.data and not status:
            raise ValidationError('Status must be Pending or Completed')
        return status
